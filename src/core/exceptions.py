"""Custom exceptions. Every layer raises a subclass of GameError so callers can catch the whole family at once."""


class GameError(Exception):
    """Root of all errors raised by this project."""


class InvalidBoardError(GameError):
    pass


class GameStateError(GameError):
    """The requested transition is not allowed in the current state of the game."""


class IllegalMoveError(GameError):
    pass


class NotYourTurnError(GameError):
    pass


class StaleAdvisorResponseError(GameError):
    """An advisor answered a request that is no longer pending (new game / undo happened in between)."""


class InvalidRequestError(GameError):
    pass


class RepositoryError(GameError):
    pass


class AdvisorError(GameError):
    """The move advisor could not produce an answer (transport or parsing problem)."""

"""
Type definitions used across layers
"""

from enum import StrEnum


class Player(StrEnum):
    BLACK = "black"
    WHITE = "white"


class Outcome(StrEnum):
    BLACK = "black"
    WHITE = "white"
    DRAW = "draw"


class Status(StrEnum):
    """States of a single game session."""

    AWAITING_MOVE = "awaiting move"
    APPLYING_MOVE = "applying move"
    AWAITING_ADVISOR = "awaiting advisor"
    GAME_OVER = "game over"


class GameMode(StrEnum):
    PVP = "pvp"
    PVC = "pvc"


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GameResult(StrEnum):
    """Result of a finished game, seen from the human player in PvC mode."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


class AdvisorSource(StrEnum):
    AI = "ai"
    HEURISTIC = "heuristic"
    FALLBACK = "fallback"
    ERROR_FALLBACK = "error-fallback"


def opponent(player: Player) -> Player:
    return Player.WHITE if player == Player.BLACK else Player.BLACK

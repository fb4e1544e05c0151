"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the state of ONE game session and moves it through an explicit state machine:

    AWAITING_MOVE ----(human move selected)----> APPLYING_MOVE
    AWAITING_ADVISOR -(advisor move received)--> APPLYING_MOVE
    APPLYING_MOVE ---(turn advanced)-----------> AWAITING_MOVE | AWAITING_ADVISOR | GAME_OVER
    any state except APPLYING_MOVE --(undo)----> AWAITING_MOVE | AWAITING_ADVISOR
    (new game) ---------------------------------> AWAITING_MOVE | AWAITING_ADVISOR

The board rules themselves live in moves.py / scoring.py. This class only decides who is to move and what is allowed.
"""

from dataclasses import dataclass, field
from typing import Optional, Self
from uuid import UUID, uuid4

from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    StaleAdvisorResponseError,
)
from src.core.models import GameModel
from src.core.shared_types import (
    Difficulty,
    GameMode,
    Outcome,
    Player,
    Status,
    opponent,
)
from src.othello.board import Board
from src.othello.cell import Position
from src.othello.moves import (
    MoveRecord,
    create_move_record,
    get_valid_moves,
    make_move,
    undo_move,
)
from src.othello.scoring import DiscCount, count_discs, get_winner, next_player


@dataclass(frozen=True)
class AdvisorRequest:
    """Everything a move advisor gets to see. request_id identifies the session's (single) pending request."""

    request_id: UUID
    board: Board
    player: Player
    valid_moves: tuple[Position, ...]
    difficulty: Difficulty


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    current_player: Player
    valid_moves: list[Position]
    status: Status
    mode: GameMode
    human_color: Player
    difficulty: Difficulty
    history: list[MoveRecord] = field(default_factory=list)
    winner: Optional[Outcome] = None
    pending_advisor_request: Optional[UUID] = None

    @classmethod
    def new_game(
        cls,
        mode: GameMode = GameMode.PVP,
        human_color: Player = Player.BLACK,
        difficulty: Difficulty = Difficulty.MEDIUM,
    ) -> Self:
        """Fresh board, black to move."""
        return cls.from_position(
            Board.initial(), Player.BLACK, mode, human_color, difficulty
        )

    @classmethod
    def from_position(
        cls,
        board: Board,
        player: Player,
        mode: GameMode = GameMode.PVP,
        human_color: Player = Player.BLACK,
        difficulty: Difficulty = Difficulty.MEDIUM,
    ) -> Self:
        """
        Start a game from an arbitrary board with `player` to move.

        NOTE If `player` cannot move they pass right away, and if nobody can move the game is already over.
        """
        game = cls(
            board=board,
            current_player=player,
            valid_moves=[],
            status=Status.AWAITING_MOVE,
            mode=mode,
            human_color=human_color,
            difficulty=difficulty,
        )
        game._advance_turn(opponent(player))
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in {status.value for status in Status}:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            )
        try:
            current_player = Player(model.current_player)
            mode = GameMode(model.mode)
            human_color = Player(model.human_color)
            difficulty = Difficulty(model.difficulty)
            winner = Outcome(model.winner) if model.winner is not None else None
            history = [MoveRecord.from_dict(entry) for entry in model.move_history]
            pending_advisor_request = (
                UUID(model.pending_advisor_request)
                if model.pending_advisor_request
                else None
            )
        except (KeyError, ValueError, IllegalMoveError) as exc:
            raise GameStateError(f"Invalid game record: {exc!r}") from exc

        board = Board.from_string(model.board)
        status = Status(model.status)
        return cls(
            board=board,
            current_player=current_player,
            valid_moves=(
                []
                if status == Status.GAME_OVER
                else get_valid_moves(board, current_player)
            ),
            status=status,
            mode=mode,
            human_color=human_color,
            difficulty=difficulty,
            history=history,
            winner=winner,
            pending_advisor_request=pending_advisor_request,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            board=self.board.to_string(),
            current_player=self.current_player.value,
            status=self.status.value,
            mode=self.mode.value,
            human_color=self.human_color.value,
            difficulty=self.difficulty.value,
            move_history=[record.to_dict() for record in self.history],
            winner=self.winner.value if self.winner is not None else None,
            pending_advisor_request=(
                str(self.pending_advisor_request)
                if self.pending_advisor_request
                else None
            ),
        )

    @property
    def disc_count(self) -> DiscCount:
        return count_discs(self.board)

    @property
    def last_move(self) -> Optional[MoveRecord]:
        return self.history[-1] if self.history else None

    @property
    def is_over(self) -> bool:
        return self.status == Status.GAME_OVER

    def is_computer(self, player: Player) -> bool:
        return self.mode == GameMode.PVC and player != self.human_color

    # --- TRANSITIONS ---
    def select_move(self, position: Position) -> MoveRecord:
        """A human picked a cell to play."""
        if self.status == Status.AWAITING_ADVISOR:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for the computer to move with {self.current_player}."
            )
        self._assert_status(Status.AWAITING_MOVE)
        self._assert_valid_move(position)
        return self._apply_move(position)

    def request_advisor_move(self) -> AdvisorRequest:
        """
        Open the advisor slot of this session.
        ----

        Asking again replaces the earlier request: only the latest one can still be answered.
        """
        self._assert_status(Status.AWAITING_ADVISOR)
        request = AdvisorRequest(
            request_id=uuid4(),
            board=self.board,
            player=self.current_player,
            valid_moves=tuple(self.valid_moves),
            difficulty=self.difficulty,
        )
        self.pending_advisor_request = request.request_id
        return request

    def receive_advisor_move(self, request_id: UUID, position: Position) -> MoveRecord:
        """The advisor answered. The caller has already replaced an invalid answer by a legal fallback."""
        if self.pending_advisor_request is None or request_id != self.pending_advisor_request:
            raise StaleAdvisorResponseError(
                f"Advisor request {request_id} is not pending (anymore)."
            )
        self._assert_status(Status.AWAITING_ADVISOR)
        self._assert_valid_move(position)
        self.pending_advisor_request = None
        return self._apply_move(position)

    def undo(self) -> list[MoveRecord]:
        """
        Take back moves. Returns the records that were undone (most recent first).
        ----

        * PvP: the last move.
        * PvC: everything up to and including the human's last move, so it is the human's turn again.
            Nothing happens if the human has not moved yet.
        """
        if self.status == Status.APPLYING_MOVE:
            raise GameStateError("Cannot undo while a move is being applied.")

        if self.mode == GameMode.PVC:
            if not any(record.player == self.human_color for record in self.history):
                return []
        elif not self.history:
            return []

        undone: list[MoveRecord] = []
        board = self.board
        while self.history:
            record = self.history.pop()
            board = undo_move(board, record)
            undone.append(record)
            if self.mode != GameMode.PVC or record.player == self.human_color:
                break

        # The oldest undone move was played from exactly this position, by the player now to move again
        self.board = board
        self.current_player = undone[-1].player
        self.valid_moves = get_valid_moves(board, self.current_player)
        self.winner = None
        self.pending_advisor_request = None
        self._change_status(self._awaiting_status())
        return undone

    # -- PRIVATE HELPERS ---
    def _assert_status(self, expected: Status) -> None:
        if self.status != expected:
            raise GameStateError(
                f"Expected game status {expected!r}, but status is {self.status!r}."
            )

    def _assert_valid_move(self, position: Position) -> None:
        if position not in self.valid_moves:
            raise IllegalMoveError(
                f"Move not allowed for {self.current_player}: {position}"
            )

    def _apply_move(self, position: Position) -> MoveRecord:
        mover = self.current_player
        self._change_status(Status.APPLYING_MOVE)

        new_board, captured = make_move(self.board, position, mover)
        record = create_move_record(position, mover, captured)

        self.board = new_board
        self.history.append(record)
        self._advance_turn(mover)
        return record

    def _advance_turn(self, mover: Player) -> None:
        """Opponent moves next; if they must pass the mover goes again; if nobody can move the game ends."""
        player = next_player(self.board, mover)
        if player is None:
            self._finish()
            return

        self.current_player = player
        self.valid_moves = get_valid_moves(self.board, player)
        self._change_status(self._awaiting_status())

    def _finish(self) -> None:
        self.valid_moves = []
        self.winner = get_winner(self.board)
        self.pending_advisor_request = None
        self._change_status(Status.GAME_OVER)

    def _awaiting_status(self) -> Status:
        if self.is_computer(self.current_player):
            return Status.AWAITING_ADVISOR
        return Status.AWAITING_MOVE

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status

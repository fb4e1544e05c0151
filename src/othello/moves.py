"""
Capturing rules: which discs flip when a disc gets placed, and how to apply / revert a move.

All functions are pure. A Board is never modified, a new one is returned instead.
Illegal moves are no-ops (the caller checks legality first), never exceptions.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Self

from src.core.exceptions import IllegalMoveError
from src.core.shared_types import Player, opponent
from src.othello.board import Board
from src.othello.cell import Cell, Position, all_positions, is_valid_position

Vector = tuple[int, int]

# Fixed order, so the list of captured discs is reproducible: N, S, W, E, NW, NE, SW, SE
DIRECTIONS: tuple[Vector, ...] = (
    (-1, 0),
    (1, 0),
    (0, -1),
    (0, 1),
    (-1, -1),
    (-1, 1),
    (1, -1),
    (1, 1),
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MoveRecord:
    """A move that was actually played. Only exists for moves that captured at least one disc."""

    position: Position
    player: Player
    captured: tuple[Position, ...]
    timestamp: datetime = field(default_factory=utc_now, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Encode with plain types (notation strings) for storage"""
        return {
            "square": self.position.to_notation(),
            "player": self.player.value,
            "captured": [position.to_notation() for position in self.captured],
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        position = Position.from_notation(data["square"])
        captured = [Position.from_notation(square) for square in data["captured"]]
        if position is None or None in captured:
            raise IllegalMoveError(f"Cannot decode move record: {data!r}")
        return cls(
            position=position,
            player=Player(data["player"]),
            captured=tuple(captured),  # type: ignore[arg-type]
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


def create_move_record(
    position: Position, player: Player, captured: list[Position]
) -> MoveRecord:
    if not captured:
        raise IllegalMoveError(
            f"Move {position.to_notation()} captures nothing and cannot be recorded."
        )
    return MoveRecord(position, player, tuple(captured))


def _flipped_in_direction(
    board: Board, position: Position, own: Cell, opposing: Cell, direction: Vector
) -> list[Position]:
    """
    Walk away from `position` while the cells hold opposing discs.
    The run only counts if it is closed off by one of our own discs.
    Running off the board or into an empty cell captures nothing.
    """
    d_row, d_col = direction
    run: list[Position] = []
    row, col = position.row + d_row, position.col + d_col
    while is_valid_position(row, col) and board.cell(Position(row, col)) == opposing:
        run.append(Position(row, col))
        row += d_row
        col += d_col

    if run and is_valid_position(row, col) and board.cell(Position(row, col)) == own:
        return run
    return []


def get_flipped_discs(board: Board, position: Position, player: Player) -> list[Position]:
    """All opposing discs that flip if `player` places a disc on `position` (empty list if none)."""
    if not position.is_within_bounds() or not board.is_empty(position):
        return []

    own = Cell.of(player)
    opposing = Cell.of(opponent(player))
    flipped: list[Position] = []
    for direction in DIRECTIONS:
        flipped.extend(_flipped_in_direction(board, position, own, opposing, direction))
    return flipped


def is_valid_move(board: Board, position: Position, player: Player) -> bool:
    if not position.is_within_bounds() or not board.is_empty(position):
        return False
    return len(get_flipped_discs(board, position, player)) > 0


def get_valid_moves(board: Board, player: Player) -> list[Position]:
    """Legal moves in row-major order"""
    return [
        position for position in all_positions() if is_valid_move(board, position, player)
    ]


def make_move(
    board: Board, position: Position, player: Player
) -> tuple[Board, list[Position]]:
    """
    Place a disc and flip the captured ones.
    ----

    Returns the new board and the captured positions.
    NOTE an illegal move returns the very same board and an empty list.
    """
    flipped = get_flipped_discs(board, position, player)
    if not flipped:
        return board, []

    disc = Cell.of(player)
    changes = {captured: disc for captured in flipped}
    changes[position] = disc
    return board.with_cells(changes), flipped


def undo_move(board: Board, record: MoveRecord) -> Board:
    """
    Inverse of make_move.

    Captured discs can only have had the opponent's color before the move, so they are flipped back to it.
    """
    restored = Cell.of(opponent(record.player))
    changes = {captured: restored for captured in record.captured}
    changes[record.position] = Cell.EMPTY
    return board.with_cells(changes)

"""
Cells and positions on the board

(placed in their own module as multiple other modules need to import them)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.core.shared_types import Player

# Othello is always played on 8x8. Dimensions never change during a game.
BOARD_SIZE = 8
FILES = "abcdefgh"
RANKS = "12345678"


class Cell(Enum):
    """Contents of a single cell. Values are the characters used in the board string."""

    EMPTY = "."
    BLACK = "B"
    WHITE = "W"

    @classmethod
    def of(cls, player: Player) -> Cell:
        """The disc a player places"""
        return cls.BLACK if player == Player.BLACK else cls.WHITE


def is_valid_position(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True, order=True)
class Position:
    """(row, col) pair. Row 0 is the top of the board, col 0 the left side."""

    row: int
    col: int

    @classmethod
    def from_notation(cls, notation: str) -> Optional[Position]:
        return notation_to_cell(notation)

    def to_notation(self) -> str:
        return cell_to_notation(self.row, self.col)

    def is_within_bounds(self) -> bool:
        return is_valid_position(self.row, self.col)

    @property
    def index(self) -> int:
        """Offset in the flat 64-cell board"""
        return self.row * BOARD_SIZE + self.col


def cell_to_notation(row: int, col: int) -> str:
    """Algebraic notation: column 0 is file 'a', row 0 is rank 8 (the top of the board)."""
    return f"{FILES[col]}{BOARD_SIZE - row}"


def notation_to_cell(notation: str) -> Optional[Position]:
    """Reverse of cell_to_notation. Returns None for anything that is not a square on the board."""
    if len(notation) != 2:
        return None

    file_char, rank_char = notation[0].lower(), notation[1]
    if file_char not in FILES or rank_char not in RANKS:
        return None

    return Position(BOARD_SIZE - int(rank_char), FILES.index(file_char))


def is_corner(position: Position) -> bool:
    edge = BOARD_SIZE - 1
    return position.row in (0, edge) and position.col in (0, edge)


def is_edge(position: Position) -> bool:
    edge = BOARD_SIZE - 1
    return position.row in (0, edge) or position.col in (0, edge)


CORNERS: tuple[Position, ...] = (
    Position(0, 0),
    Position(0, BOARD_SIZE - 1),
    Position(BOARD_SIZE - 1, 0),
    Position(BOARD_SIZE - 1, BOARD_SIZE - 1),
)


def all_positions() -> list[Position]:
    """All 64 positions in row-major order"""
    return [Position(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)]

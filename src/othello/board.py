"""The Board is an immutable value: every change produces a new Board, the old one stays valid (history, undo)."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Self

from src.core.exceptions import InvalidBoardError
from src.othello.cell import BOARD_SIZE, Cell, Position

NUM_CELLS = BOARD_SIZE * BOARD_SIZE
ROW_SEPARATOR = "/"

# The 4 seed discs in the center
INITIAL_DISCS: dict[Position, Cell] = {
    Position(3, 3): Cell.WHITE,
    Position(3, 4): Cell.BLACK,
    Position(4, 3): Cell.BLACK,
    Position(4, 4): Cell.WHITE,
}


@dataclass(frozen=True)
class Board:
    """Flat tuple of 64 cells, addressed by row * 8 + col."""

    cells: tuple[Cell, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != NUM_CELLS:
            raise InvalidBoardError(
                f"A board has exactly {NUM_CELLS} cells, got {len(self.cells)}."
            )

    @classmethod
    def empty(cls) -> Self:
        return cls((Cell.EMPTY,) * NUM_CELLS)

    @classmethod
    def initial(cls) -> Self:
        return cls.empty().with_cells(INITIAL_DISCS)

    @classmethod
    def from_string(cls, board_str: str) -> Self:
        """Construct a board from its string form.

        8 rows of 8 characters, separated by slashes and read from the top row down.
        '.' is an empty cell, 'B' a black disc and 'W' a white disc.
        ex. the initial position:
        ......../......../......../...WB.../...BW.../......../......../........
        """
        rows = board_str.strip().split(ROW_SEPARATOR)
        if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
            raise InvalidBoardError(
                f"Board string must have {BOARD_SIZE} rows of {BOARD_SIZE} characters: {board_str!r}"
            )
        try:
            cells = tuple(Cell(character.upper()) for row in rows for character in row)
        except ValueError as exc:
            raise InvalidBoardError(f"Unknown cell character in {board_str!r}") from exc
        return cls(cells)

    def to_string(self) -> str:
        return ROW_SEPARATOR.join(
            "".join(cell.value for cell in self.row(row_idx))
            for row_idx in range(BOARD_SIZE)
        )

    def __str__(self) -> str:
        """Multi-line view with the row index in front, handy in logs / test failures"""
        return "\n".join(
            f"{row_idx}: {' '.join(cell.value for cell in self.row(row_idx))}"
            for row_idx in range(BOARD_SIZE)
        )

    def cell(self, position: Position) -> Cell:
        """NOTE: raises InvalidBoardError off the board. Callers that probe neighbours check with is_valid_position first."""
        _check_bounds(position)
        return self.cells[position.index]

    def row(self, row_idx: int) -> tuple[Cell, ...]:
        start = row_idx * BOARD_SIZE
        return self.cells[start : start + BOARD_SIZE]

    def is_empty(self, position: Position) -> bool:
        return self.cell(position) == Cell.EMPTY

    def with_cells(self, changes: Mapping[Position, Cell]) -> Self:
        """New board with the given cells overwritten."""
        cells = list(self.cells)
        for position, cell in changes.items():
            _check_bounds(position)
            cells[position.index] = cell
        return type(self)(tuple(cells))

    def count(self, cell: Cell) -> int:
        return self.cells.count(cell)

    def is_full(self) -> bool:
        return Cell.EMPTY not in self.cells


def _check_bounds(position: Position) -> None:
    # the flat index of an off-board position would silently wrap onto another cell
    if not position.is_within_bounds():
        raise InvalidBoardError(f"Position {position} is not on the board.")


def create_initial_board() -> Board:
    return Board.initial()

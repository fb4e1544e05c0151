"""Unit tests for /src/othello/moves.py"""

from datetime import datetime, timezone

import pytest

from src.core.exceptions import IllegalMoveError, InvalidBoardError
from src.core.shared_types import Player
from src.othello.board import Board
from src.othello.cell import Cell, Position
from src.othello.moves import (
    DIRECTIONS,
    MoveRecord,
    create_move_record,
    get_flipped_discs,
    get_valid_moves,
    is_valid_move,
    make_move,
    undo_move,
)
from src.othello.scoring import count_discs
from tests.othello.boards import AFTER_D6, RUN_TO_EDGE, THREE_DIRECTIONS


def test_direction_order() -> None:
    """N, S, W, E, NW, NE, SW, SE"""
    assert DIRECTIONS == ((-1, 0), (1, 0), (0, -1), (0, 1), (-1, -1), (-1, 1), (1, -1), (1, 1))


# -- CAPTURES ---
def test_single_capture_from_initial_board() -> None:
    board = Board.initial()
    assert get_flipped_discs(board, Position(2, 3), Player.BLACK) == [Position(3, 3)]


def test_captures_in_multiple_directions_in_fixed_order() -> None:
    board = Board.from_string(THREE_DIRECTIONS)
    flipped = get_flipped_discs(board, Position(3, 3), Player.BLACK)
    # N first, then W, then SE. The run towards the empty b7 (NW) does not count.
    assert flipped == [Position(2, 3), Position(3, 2), Position(4, 4)]


def test_run_to_board_edge_captures_nothing() -> None:
    board = Board.from_string(RUN_TO_EDGE)
    assert get_flipped_discs(board, Position(0, 3), Player.BLACK) == []
    assert not is_valid_move(board, Position(0, 3), Player.BLACK)


def test_run_ending_in_empty_cell_captures_nothing() -> None:
    board = Board.from_string("..WW.B../" + "/".join(["........"] * 7))
    assert get_flipped_discs(board, Position(0, 1), Player.BLACK) == []


def test_long_run_is_captured_completely() -> None:
    board = Board.from_string(".WWWWWWB/" + "/".join(["........"] * 7))
    flipped = get_flipped_discs(board, Position(0, 0), Player.BLACK)
    assert flipped == [Position(0, col) for col in range(1, 7)]


def test_occupied_cell_has_no_captures() -> None:
    board = Board.initial()
    assert get_flipped_discs(board, Position(3, 3), Player.BLACK) == []
    assert not is_valid_move(board, Position(3, 3), Player.BLACK)


@pytest.mark.parametrize("position", [Position(-1, 0), Position(0, 8), Position(8, 8)])
def test_out_of_bounds(position: Position) -> None:
    board = Board.initial()
    assert get_flipped_discs(board, position, Player.BLACK) == []
    assert not is_valid_move(board, position, Player.BLACK)


# -- LEGAL MOVES ---
def test_initial_valid_moves() -> None:
    board = Board.initial()
    expected = [Position(2, 3), Position(3, 2), Position(4, 5), Position(5, 4)]
    assert get_valid_moves(board, Player.BLACK) == expected
    assert get_valid_moves(board, Player.WHITE) == [
        Position(2, 4),
        Position(3, 5),
        Position(4, 2),
        Position(5, 3),
    ]


def test_valid_moves_after_first_move() -> None:
    board = Board.from_string(AFTER_D6)
    assert get_valid_moves(board, Player.WHITE) == [
        Position(2, 2),
        Position(2, 4),
        Position(4, 2),
    ]


def test_empty_board_has_no_moves() -> None:
    assert get_valid_moves(Board.empty(), Player.BLACK) == []
    assert get_valid_moves(Board.empty(), Player.WHITE) == []


# -- MAKING MOVES ---
def test_make_move_from_initial_board() -> None:
    board = Board.initial()
    new_board, captured = make_move(board, Position(2, 3), Player.BLACK)

    assert captured == [Position(3, 3)]
    assert new_board == Board.from_string(AFTER_D6)
    count = count_discs(new_board)
    assert (count.black, count.white) == (4, 1)

    # the input board is left untouched
    assert board == Board.initial()


def test_make_move_multiple_directions() -> None:
    board = Board.from_string(THREE_DIRECTIONS)
    before = count_discs(board)
    new_board, captured = make_move(board, Position(3, 3), Player.BLACK)

    after = count_discs(new_board)
    assert after.black == before.black + 1 + len(captured)
    assert after.white == before.white - len(captured)
    for position in captured + [Position(3, 3)]:
        assert new_board.cell(position) == Cell.BLACK
    # the white disc towards the open side stays white
    assert new_board.cell(Position(2, 2)) == Cell.WHITE


@pytest.mark.parametrize(
    "position",
    [Position(0, 0), Position(3, 3), Position(2, 4), Position(-1, 3)],
)
def test_illegal_move_is_a_no_op(position: Position) -> None:
    board = Board.initial()
    new_board, captured = make_move(board, position, Player.BLACK)
    assert captured == []
    assert new_board is board


# -- UNDO ---
def test_undo_restores_board() -> None:
    board = Board.from_string(THREE_DIRECTIONS)
    new_board, captured = make_move(board, Position(3, 3), Player.BLACK)
    record = create_move_record(Position(3, 3), Player.BLACK, captured)

    assert undo_move(new_board, record) == board


def test_undo_multiple_moves_in_reverse_order() -> None:
    board = Board.initial()
    history: list[MoveRecord] = []
    for position, player in [
        (Position(2, 3), Player.BLACK),
        (Position(2, 2), Player.WHITE),
        (Position(3, 2), Player.BLACK),
    ]:
        board, captured = make_move(board, position, player)
        history.append(create_move_record(position, player, captured))

    while history:
        board = undo_move(board, history.pop())
    assert board == Board.initial()


def test_undo_of_off_board_record_fails_loudly() -> None:
    """(-5, 3) would map to the flat index of (3, 3) if it were not checked"""
    board = Board.from_string(AFTER_D6)
    record = MoveRecord(Position(-5, 3), Player.BLACK, (Position(3, 3),))
    with pytest.raises(InvalidBoardError):
        undo_move(board, record)


# -- MOVE RECORDS ---
def test_move_record_needs_captures() -> None:
    with pytest.raises(IllegalMoveError):
        create_move_record(Position(0, 0), Player.BLACK, [])


def test_move_record_timestamp() -> None:
    record = create_move_record(Position(2, 3), Player.BLACK, [Position(3, 3)])
    assert record.timestamp.tzinfo is not None
    assert record.captured == (Position(3, 3),)


def test_move_record_equality_ignores_timestamp() -> None:
    first = MoveRecord(Position(2, 3), Player.BLACK, (Position(3, 3),))
    second = MoveRecord(
        Position(2, 3),
        Player.BLACK,
        (Position(3, 3),),
        timestamp=datetime(2020, 1, 1, tzinfo=timezone.utc),
    )
    assert first == second


def test_move_record_dict_roundtrip() -> None:
    record = create_move_record(Position(3, 3), Player.BLACK, [Position(2, 3), Position(3, 2)])
    data = record.to_dict()
    assert data["square"] == "d5"
    assert data["player"] == "black"
    assert data["captured"] == ["d6", "c5"]

    decoded = MoveRecord.from_dict(data)
    assert decoded == record
    assert decoded.timestamp == record.timestamp


def test_move_record_from_bad_dict() -> None:
    with pytest.raises(IllegalMoveError):
        MoveRecord.from_dict(
            {"square": "z9", "player": "black", "captured": [], "timestamp": "2020-01-01T00:00:00+00:00"}
        )

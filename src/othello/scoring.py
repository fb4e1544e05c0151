"""Disc counts, end of game, winner, turn order and the heuristic evaluation used by the local advisor."""

from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import Outcome, Player, opponent
from src.othello.board import Board
from src.othello.cell import CORNERS, Cell
from src.othello.moves import get_valid_moves

CORNER_BONUS = 10
MOBILITY_WEIGHT = 2


@dataclass(frozen=True)
class DiscCount:
    black: int
    white: int

    def of(self, player: Player) -> int:
        return self.black if player == Player.BLACK else self.white


def count_discs(board: Board) -> DiscCount:
    return DiscCount(black=board.count(Cell.BLACK), white=board.count(Cell.WHITE))


def mobility(board: Board, player: Player) -> int:
    """Number of legal moves"""
    return len(get_valid_moves(board, player))


def is_game_over(board: Board) -> bool:
    """Neither side can move. Independent of whose turn it is."""
    return not get_valid_moves(board, Player.BLACK) and not get_valid_moves(
        board, Player.WHITE
    )


def get_winner(board: Board) -> Outcome:
    """
    Compare disc counts.

    NOTE only a real result when is_game_over(board). Otherwise this is just who is ahead.
    """
    count = count_discs(board)
    if count.black > count.white:
        return Outcome.BLACK
    if count.white > count.black:
        return Outcome.WHITE
    return Outcome.DRAW


def next_player(board: Board, mover: Player) -> Optional[Player]:
    """
    Who moves after `mover` just played on `board`.
    ----

    1. The opponent, if they have a legal move.
    2. Otherwise the opponent passes and `mover` goes again, if they still have a legal move.
    3. Otherwise nobody can move: None, the game is over.
    """
    other = opponent(mover)
    if get_valid_moves(board, other):
        return other
    if get_valid_moves(board, mover):
        return mover
    return None


def evaluate_position(board: Board, player: Player) -> int:
    """
    Simple heuristic from `player`'s point of view (higher is better):
    disc difference, +/- 10 for every corner owned by us / the opponent and twice the mobility difference.
    """
    other = opponent(player)
    count = count_discs(board)
    score = count.of(player) - count.of(other)

    own, opposing = Cell.of(player), Cell.of(other)
    for corner in CORNERS:
        if board.cell(corner) == own:
            score += CORNER_BONUS
        elif board.cell(corner) == opposing:
            score -= CORNER_BONUS

    score += MOBILITY_WEIGHT * (mobility(board, player) - mobility(board, other))
    return score

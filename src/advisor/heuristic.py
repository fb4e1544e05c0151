"""
Local move advisor. No network, no search: a simple priority rule.

1. Take a corner if possible.
2. Otherwise avoid the squares next to an EMPTY corner (X-squares diagonally, C-squares along the edge),
   unless nothing else is left.
3. Prefer edges over the rest.
Inside the chosen group, play the move with the best evaluate_position afterwards (random among equals).
"""

import random

from src.advisor.base import AdvisorSuggestion
from src.core.shared_types import AdvisorSource
from src.othello.board import Board
from src.othello.cell import CORNERS, Position, is_corner, is_edge
from src.othello.game import AdvisorRequest
from src.othello.moves import make_move
from src.othello.scoring import evaluate_position


def corner_neighbours(corner: Position) -> list[Position]:
    """The X-square and two C-squares belonging to a corner"""
    d_row = 1 if corner.row == 0 else -1
    d_col = 1 if corner.col == 0 else -1
    return [
        Position(corner.row + d_row, corner.col + d_col),
        Position(corner.row, corner.col + d_col),
        Position(corner.row + d_row, corner.col),
    ]


def dangerous_squares(board: Board) -> set[Position]:
    """Neighbours of the corners that are still empty"""
    return {
        square
        for corner in CORNERS
        if board.is_empty(corner)
        for square in corner_neighbours(corner)
    }


class HeuristicAdvisor:
    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def suggest_move(self, request: AdvisorRequest) -> AdvisorSuggestion:
        moves = list(request.valid_moves)
        if not moves:
            return AdvisorSuggestion(None, "No legal moves", AdvisorSource.HEURISTIC)

        corners = [move for move in moves if is_corner(move)]
        if corners:
            return self._suggest(request, corners, "Corner available")

        dangerous = dangerous_squares(request.board)
        safe_moves = [move for move in moves if move not in dangerous]
        candidates = safe_moves or moves

        edges = [move for move in candidates if is_edge(move)]
        if edges:
            return self._suggest(request, edges, "Edge move")

        return self._suggest(request, candidates, "Best remaining move")

    def _suggest(
        self, request: AdvisorRequest, candidates: list[Position], reason: str
    ) -> AdvisorSuggestion:
        best = self._best_by_evaluation(request, candidates)
        return AdvisorSuggestion(
            position=best,
            reasoning=f"{reason}: {best.to_notation()}",
            source=AdvisorSource.HEURISTIC,
        )

    def _best_by_evaluation(
        self, request: AdvisorRequest, candidates: list[Position]
    ) -> Position:
        scores = {
            move: evaluate_position(
                make_move(request.board, move, request.player)[0], request.player
            )
            for move in candidates
        }
        best_score = max(scores.values())
        return self.rng.choice([move for move in candidates if scores[move] == best_score])

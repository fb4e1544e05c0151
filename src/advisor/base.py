"""
Protocol for move advisors (the computer opponent) + the guard that never lets a bad answer stall the game.

Key idea: the game never trusts an advisor. Whatever comes back is checked against the legal moves, and anything
missing, illegal, or an outright failure gets replaced by a uniformly random legal move.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Protocol

from src.core.exceptions import AdvisorError
from src.core.shared_types import AdvisorSource, Difficulty
from src.othello.cell import Position
from src.othello.game import AdvisorRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdvisorSuggestion:
    position: Optional[Position]
    reasoning: str
    source: AdvisorSource


class MoveAdvisor(Protocol):
    """Anything that can pick a move for the player in the request"""

    def suggest_move(self, request: AdvisorRequest) -> AdvisorSuggestion:
        """May raise AdvisorError."""
        ...


def random_move(valid_moves: tuple[Position, ...], rng: random.Random) -> Position:
    return rng.choice(valid_moves)


def resolve_advisor_move(
    advisor: MoveAdvisor, request: AdvisorRequest, rng: random.Random
) -> AdvisorSuggestion:
    """
    Ask the advisor and validate the answer.
    ----

    * legal suggestion: returned as is
    * no / illegal suggestion: random legal move (source FALLBACK)
    * AdvisorError or any other exception: random legal move (source ERROR_FALLBACK)
    """
    if not request.valid_moves:
        raise AdvisorError("Advisor asked to move without any legal move.")

    try:
        suggestion = advisor.suggest_move(request)
    except AdvisorError as exc:
        logger.error("Error getting advisor move: %s", exc)
        return _error_fallback(request, rng, exc)
    except Exception as exc:
        # advisors can fail in ways of their own (timeouts, bugs)
        logger.exception("Unexpected error in advisor %s", type(advisor).__name__)
        return _error_fallback(request, rng, exc)

    if suggestion.position in request.valid_moves:
        return suggestion

    logger.warning(
        "Advisor returned invalid move %s, using random fallback", suggestion.position
    )
    return AdvisorSuggestion(
        position=random_move(request.valid_moves, rng),
        reasoning=suggestion.reasoning
        or "Fallback to random move (advisor suggestion was not a legal move)",
        source=AdvisorSource.FALLBACK,
    )


def _error_fallback(
    request: AdvisorRequest, rng: random.Random, exc: Exception
) -> AdvisorSuggestion:
    return AdvisorSuggestion(
        position=random_move(request.valid_moves, rng),
        reasoning=f"Fallback to random move (advisor error: {exc})",
        source=AdvisorSource.ERROR_FALLBACK,
    )


class TieredAdvisor:
    """
    Combine a remote advisor with the local heuristic.

    On EASY, a share of the moves is picked locally (cheaper, and it makes the computer weaker / less predictable).
    """

    def __init__(
        self,
        remote: MoveAdvisor,
        local: MoveAdvisor,
        rng: random.Random,
        easy_local_share: float = 0.5,
    ) -> None:
        self.remote = remote
        self.local = local
        self.rng = rng
        self.easy_local_share = easy_local_share

    def suggest_move(self, request: AdvisorRequest) -> AdvisorSuggestion:
        if (
            request.difficulty == Difficulty.EASY
            and self.rng.random() < self.easy_local_share
        ):
            return self.local.suggest_move(request)
        return self.remote.suggest_move(request)

"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel

from src.core.shared_types import Difficulty, GameMode, GameResult, Player

# Type alias to make GameModel easier to read
MoveEntry = dict[str, Any]


@dataclass
class GameModel:
    """Transport-safe representation of an Othello game used between Service, DB, and Game layers."""

    board: str
    current_player: str
    status: str
    mode: str
    human_color: str
    difficulty: str
    move_history: list[MoveEntry] = field(default_factory=list)
    winner: Optional[str] = None
    pending_advisor_request: Optional[str] = None


class GameSettings(BaseModel):
    """Preferences of the (single) local user. Stored as one JSON blob."""

    mode: GameMode = GameMode.PVC
    difficulty: Difficulty = Difficulty.MEDIUM
    player_color: Player = Player.BLACK
    sound_enabled: bool = True
    show_hints: bool = True


class GameStats(BaseModel):
    """Cumulative results of finished PvC games."""

    games_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    total_moves: int = 0
    average_game_length: int = 0


def update_stats(stats: GameStats, result: GameResult, move_count: int) -> GameStats:
    """Return new stats with one more finished game. The input is left untouched."""
    games_played = stats.games_played + 1
    total_moves = stats.total_moves + move_count
    return GameStats(
        games_played=games_played,
        wins=stats.wins + (result == GameResult.WIN),
        losses=stats.losses + (result == GameResult.LOSS),
        draws=stats.draws + (result == GameResult.DRAW),
        total_moves=total_moves,
        # halves round up
        average_game_length=math.floor(total_moves / games_played + 0.5),
    )

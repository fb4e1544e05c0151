"""Protocol repositories (can implement later for another storage than SQL Alchemy)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel, GameSettings, GameStats


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        ...


class PreferenceRepository(Protocol):
    """
    Settings and statistics of the local user.

    NOTE implementations must never raise: a broken store falls back to the defaults, play continues.
    """

    def load_settings(self) -> GameSettings: ...

    def save_settings(self, settings: GameSettings) -> None: ...

    def load_stats(self) -> GameStats: ...

    def save_stats(self, stats: GameStats) -> None: ...

    def clear(self) -> None:
        """Remove all stored preferences"""
        ...

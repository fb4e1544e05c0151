"""Implementation of the repositories using SQLAlchemy"""

import logging
from typing import Any, TypeVar
from uuid import UUID, uuid4

from pydantic import BaseModel, ValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.models import GameModel, GameSettings, GameStats
from src.db.schema import DBGame, DBPreference

logger = logging.getLogger(__name__)

# Fixed keys of the preference blobs
SETTINGS_KEY = "othello_settings"
STATS_KEY = "othello_stats"

PreferenceT = TypeVar("PreferenceT", bound=BaseModel)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(id=new_id)
        self._copy_into(game_db, game)
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self._copy_into(game_db, game)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _copy_into(self, game_db: DBGame, game: GameModel) -> None:
        game_db.board = game.board
        game_db.current_player = game.current_player
        game_db.status = game.status
        game_db.mode = game.mode
        game_db.human_color = game.human_color
        game_db.difficulty = game.difficulty
        # new list, so SQLAlchemy notices the change of the JSON column
        game_db.move_history = list(game.move_history)
        game_db.winner = game.winner
        game_db.pending_advisor_request = game.pending_advisor_request

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            board=game_db.board,
            current_player=game_db.current_player,
            status=game_db.status,
            mode=game_db.mode,
            human_color=game_db.human_color,
            difficulty=game_db.difficulty,
            move_history=list(game_db.move_history),
            winner=game_db.winner,
            pending_advisor_request=game_db.pending_advisor_request,
        )


class SQLPreferenceRepository:
    """
    Settings / statistics stored as JSON blobs in the preferences table.
    ----

    Loading merges the stored blob over the defaults: unknown keys are dropped and invalid fields keep their default.
    (older / newer shaped data keeps working)
    Storage errors are logged and swallowed. They must never stop a game.
    """

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def load_settings(self) -> GameSettings:
        return self._load(SETTINGS_KEY, GameSettings)

    def save_settings(self, settings: GameSettings) -> None:
        self._save(SETTINGS_KEY, settings)

    def load_stats(self) -> GameStats:
        return self._load(STATS_KEY, GameStats)

    def save_stats(self, stats: GameStats) -> None:
        self._save(STATS_KEY, stats)

    def clear(self) -> None:
        try:
            self.db.execute(
                delete(DBPreference).where(DBPreference.key.in_([SETTINGS_KEY, STATS_KEY]))
            )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error clearing preferences: %s", exc)

    def _load(self, key: str, model: type[PreferenceT]) -> PreferenceT:
        try:
            record = self.db.get(DBPreference, key)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error loading %s: %s", key, exc)
            return model()

        if record is None or not isinstance(record.value, dict):
            return model()
        return merge_with_defaults(model, record.value)

    def _save(self, key: str, value: BaseModel) -> None:
        try:
            self.db.merge(DBPreference(key=key, value=value.model_dump(mode="json")))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error saving %s: %s", key, exc)


def merge_with_defaults(model: type[PreferenceT], stored: dict[str, Any]) -> PreferenceT:
    """Keep the known and valid fields of `stored`, defaults for everything else"""
    known = {key: value for key, value in stored.items() if key in model.model_fields}
    try:
        return model.model_validate(known)
    except ValidationError as exc:
        invalid = {error["loc"][0] for error in exc.errors() if error["loc"]}
        logger.warning("Ignoring invalid stored fields %s of %s", invalid, model.__name__)
        return model.model_validate(
            {key: value for key, value in known.items() if key not in invalid}
        )

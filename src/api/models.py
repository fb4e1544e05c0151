"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidBoardError, InvalidRequestError
from src.core.shared_types import Difficulty, GameMode, Outcome, Player, Status
from src.othello.board import Board
from src.othello.cell import notation_to_cell


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """Fields left out are taken from the stored settings."""

    mode: Optional[GameMode] = None
    player_color: Optional[Player] = None
    difficulty: Optional[Difficulty] = None
    starting_board: Optional[str] = None
    starting_player: Player = Player.BLACK

    @field_validator("starting_board")
    @classmethod
    def validate_starting_board(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        try:
            Board.from_string(value)
        except InvalidBoardError as exc:
            raise InvalidRequestError(f"Cannot interpret starting board: {exc}") from exc
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class ValidMovesRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if notation_to_cell(value) is None:
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value.lower()


class UndoRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class UpdateSettingsRequest(BaseModel):
    """Partial update: only the fields that are set get changed."""

    mode: Optional[GameMode] = None
    difficulty: Optional[Difficulty] = None
    player_color: Optional[Player] = None
    sound_enabled: Optional[bool] = None
    show_hints: Optional[bool] = None


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    board: str
    current_player: Player
    status: Status
    mode: GameMode
    human_color: Player
    difficulty: Difficulty
    black_count: int
    white_count: int
    valid_moves: list[str]
    move_history: list[str]
    last_captured: list[str]
    winner: Optional[Outcome]


class ValidMovesResponse(BaseModel):
    game_id: UUID
    player: Player
    valid_moves: list[str]

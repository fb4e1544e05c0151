"""Orchestration of communication from API router to business logic, move advisor and persistence layers (and the reverse direction)."""

import logging
import random
from typing import Optional
from uuid import UUID

from src.advisor.base import MoveAdvisor, resolve_advisor_move
from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    UndoRequest,
    UpdateSettingsRequest,
    ValidMovesRequest,
    ValidMovesResponse,
)
from src.core.exceptions import InvalidRequestError, RepositoryError
from src.core.models import GameModel, GameSettings, GameStats, update_stats
from src.core.shared_types import GameMode, GameResult, Outcome, Status
from src.db.repository import GameRepository, PreferenceRepository
from src.othello.board import Board
from src.othello.cell import notation_to_cell
from src.othello.game import Game

logger = logging.getLogger(__name__)


class OthelloService:
    """Orchestration of layers for Othello games."""

    def __init__(
        self,
        repository: GameRepository,
        preferences: PreferenceRepository,
        advisor: MoveAdvisor,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repo = repository
        self.preferences = preferences
        self.advisor = advisor
        self.rng = rng or random.Random()

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a game. Missing options come from the stored settings."""
        settings = self.preferences.load_settings()
        mode = request.mode or settings.mode
        human_color = request.player_color or settings.player_color
        difficulty = request.difficulty or settings.difficulty

        if request.starting_board:
            game = Game.from_position(
                Board.from_string(request.starting_board),
                request.starting_player,
                mode,
                human_color,
                difficulty,
            )
        else:
            game = Game.new_game(mode, human_color, difficulty)

        # The computer might have the first move (human plays white)
        self._play_advisor_turns(game)
        if game.history:
            self._record_result_if_finished(game)
        stored_game, game_id = self.repo.create_game(game.to_model())
        return self._create_game_response(game_id, Game.from_model(stored_game))

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to redraw the board.
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        return self._create_game_response(request.game_id, game)

    def valid_moves(self, request: ValidMovesRequest) -> ValidMovesResponse:
        """Legal moves of the player to move (used for move hints)."""
        game = Game.from_model(self._fetch_game(request.game_id))
        return ValidMovesResponse(
            game_id=request.game_id,
            player=game.current_player,
            valid_moves=[position.to_notation() for position in game.valid_moves],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """A human plays a move. In PvC mode the computer answers right away."""
        position = notation_to_cell(request.square)
        if position is None:
            raise InvalidRequestError(f"Not a square on the board: {request.square!r}")

        game = Game.from_model(self._fetch_game(request.game_id))
        game.select_move(position)
        self._play_advisor_turns(game)
        self._record_result_if_finished(game)

        after_move = game.to_model()
        self.repo.update_game(request.game_id, after_move)
        return self._create_game_response(request.game_id, game)

    def undo_move(self, request: UndoRequest) -> GameResponse:
        """Take back the last move (PvC: back to the human's last turn)."""
        game = Game.from_model(self._fetch_game(request.game_id))
        undone = game.undo()
        logger.debug("Undid %d move(s) in game %s", len(undone), request.game_id)
        self._play_advisor_turns(game)

        self.repo.update_game(request.game_id, game.to_model())
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Settings / statistics ---
    def get_settings(self) -> GameSettings:
        return self.preferences.load_settings()

    def update_settings(self, request: UpdateSettingsRequest) -> GameSettings:
        current = self.preferences.load_settings()
        updated = current.model_copy(update=request.model_dump(exclude_none=True))
        self.preferences.save_settings(updated)
        return updated

    def get_stats(self) -> GameStats:
        return self.preferences.load_stats()

    def clear_preferences(self) -> None:
        self.preferences.clear()

    # -- Internal helpers --
    def _play_advisor_turns(self, game: Game) -> None:
        """
        Let the computer move as long as it is its turn.

        NOTE can be more than one move: when the human has to pass, the computer moves again.
        """
        while game.status == Status.AWAITING_ADVISOR:
            advisor_request = game.request_advisor_move()
            suggestion = resolve_advisor_move(self.advisor, advisor_request, self.rng)
            # for the type checker: resolve_advisor_move always ends up with a legal move
            assert suggestion.position is not None
            logger.debug(
                "Advisor (%s) plays %s: %s",
                suggestion.source,
                suggestion.position.to_notation(),
                suggestion.reasoning,
            )
            game.receive_advisor_move(advisor_request.request_id, suggestion.position)

    def _record_result_if_finished(self, game: Game) -> None:
        """Only PvC games count towards the statistics (the result of the human player)."""
        if not game.is_over or game.mode != GameMode.PVC:
            return

        if game.winner == Outcome.DRAW:
            result = GameResult.DRAW
        elif game.winner is not None and game.winner.value == game.human_color.value:
            result = GameResult.WIN
        else:
            result = GameResult.LOSS

        stats = update_stats(self.preferences.load_stats(), result, len(game.history))
        self.preferences.save_stats(stats)
        logger.info("Game finished: %s (%d moves)", result, len(game.history))

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the Game into a GameResponse (for game with given ID.)"""
        count = game.disc_count
        last_move = game.last_move
        return GameResponse(
            game_id=game_id,
            board=game.board.to_string(),
            current_player=game.current_player,
            status=game.status,
            mode=game.mode,
            human_color=game.human_color,
            difficulty=game.difficulty,
            black_count=count.black,
            white_count=count.white,
            valid_moves=[position.to_notation() for position in game.valid_moves],
            move_history=[record.position.to_notation() for record in game.history],
            last_captured=(
                [position.to_notation() for position in last_move.captured]
                if last_move
                else []
            ),
            winner=game.winner,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

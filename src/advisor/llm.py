"""
Remote move advisor backed by a language model behind an OpenAI-style chat completions endpoint.

The model is asked to answer with a small JSON object: {"row": <int>, "col": <int>, "reasoning": "<text>"}.
Anything that goes wrong on the way (network, HTTP status, unparsable reply) becomes an AdvisorError.
Whether the suggested move is legal is checked by the caller (see base.resolve_advisor_move).
"""

import json
import re
from typing import Any, Optional

import requests
from pydantic import BaseModel, ValidationError

from src.advisor.base import AdvisorSuggestion
from src.core import config
from src.core.exceptions import AdvisorError
from src.core.shared_types import AdvisorSource, Difficulty, Player
from src.othello.board import Board
from src.othello.cell import BOARD_SIZE, Position
from src.othello.game import AdvisorRequest

JSON_OBJECT_REGEX = re.compile(r"\{[^}]+\}")

SYSTEM_PROMPT = "You are an expert Othello/Reversi player. Always respond with valid JSON containing your move coordinates."

DIFFICULTY_INSTRUCTIONS: dict[Difficulty, str] = {
    Difficulty.EASY: (
        "Choose any valid move. Just pick one randomly from the valid moves.\n\n"
        "Respond with ONLY a JSON object in this exact format:\n"
        '{"row": <number>, "col": <number>}'
    ),
    Difficulty.MEDIUM: (
        "Apply basic Othello strategy:\n"
        "1. PRIORITIZE corners (0,0), (0,7), (7,0), (7,7) - they cannot be flipped\n"
        "2. AVOID squares adjacent to corners if corner is empty\n"
        "3. Prefer edge positions\n"
        "4. Maximize the number of discs you flip\n\n"
        "Analyze the board and choose the best move based on these priorities.\n\n"
        "Respond with ONLY a JSON object in this exact format:\n"
        '{"row": <number>, "col": <number>, "reasoning": "<brief explanation>"}'
    ),
    Difficulty.HARD: (
        "Apply advanced Othello strategy:\n\n"
        "STRATEGIC PRIORITIES (in order):\n"
        "1. CORNERS: Always take corners when available - they are permanent\n"
        "2. STABLE DISCS: Build chains of discs that cannot be flipped\n"
        "3. AVOID X-SQUARES: Never play diagonally adjacent to empty corners\n"
        "4. AVOID C-SQUARES: Avoid positions adjacent to corners on edges when corner is empty\n"
        "5. EDGE CONTROL: Secure edges, especially completed edge lines\n"
        "6. MOBILITY: Prefer moves that maximize your future valid moves\n"
        "7. PARITY: In endgame, try to play last in each region\n"
        "8. TEMPO: Sometimes sacrifice discs early to gain positional advantage\n\n"
        "Analyze deeply and choose the optimal move.\n\n"
        "Respond with ONLY a JSON object in this exact format:\n"
        '{"row": <number>, "col": <number>, "reasoning": "<strategic analysis>"}'
    ),
}


class AdvisorReply(BaseModel):
    """The JSON object we ask the model to answer with"""

    row: int
    col: int
    reasoning: str = ""


def board_to_prompt(board: Board) -> str:
    return "\n".join(
        f"{row_idx}: [{' '.join(cell.value for cell in board.row(row_idx))}]"
        for row_idx in range(BOARD_SIZE)
    )


def build_prompt(request: AdvisorRequest) -> str:
    player_name = "Black (B)" if request.player == Player.BLACK else "White (W)"
    valid_moves = ", ".join(f"({move.row}, {move.col})" for move in request.valid_moves)
    return (
        f"You are playing Othello/Reversi as {player_name}.\n\n"
        f"Current Board State (. = empty, B = Black, W = White):\n{board_to_prompt(request.board)}\n\n"
        f"Valid moves for your turn: {valid_moves}\n\n"
        f"{DIFFICULTY_INSTRUCTIONS[request.difficulty]}"
    )


def parse_reply(text: str) -> AdvisorReply:
    """Models like to wrap the JSON in prose / code fences. Take the first {...} we can find."""
    match = JSON_OBJECT_REGEX.search(text)
    if not match:
        raise AdvisorError(f"No JSON object in advisor reply: {text!r}")
    try:
        return AdvisorReply.model_validate(json.loads(match.group(0)))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise AdvisorError(f"Cannot parse advisor reply: {text!r}") from exc


class LLMAdvisor:
    """
    HTTP client for the remote advisor.

    Settings default to the values in src.core.config. A requests.Session can be injected (connection reuse, tests).
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url or config.ADVISOR_URL
        self.api_key = api_key if api_key is not None else config.ADVISOR_API_KEY
        self.model = model or config.ADVISOR_MODEL
        self.timeout = timeout if timeout is not None else config.ADVISOR_TIMEOUT
        self.session = session or requests.Session()

    def suggest_move(self, request: AdvisorRequest) -> AdvisorSuggestion:
        text = self._complete(build_prompt(request))
        reply = parse_reply(text)
        return AdvisorSuggestion(
            position=Position(reply.row, reply.col),
            reasoning=reply.reasoning or text,
            source=AdvisorSource.AI,
        )

    def _complete(self, prompt: str) -> str:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        }
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = self.session.post(
                self.url, json=payload, headers=headers, timeout=self.timeout
            )
            response.raise_for_status()
            content = response.json()["choices"][0]["message"]["content"]
        except requests.RequestException as exc:
            raise AdvisorError(f"Advisor request failed: {exc}") from exc
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise AdvisorError("Invalid response format from advisor") from exc

        if not isinstance(content, str):
            raise AdvisorError("Invalid response format from advisor")
        return content

"""Unit tests for src/advisor/llm.py"""

from typing import Any
from uuid import uuid4

import pytest
import requests

from src.advisor.llm import LLMAdvisor, board_to_prompt, build_prompt, parse_reply
from src.core.exceptions import AdvisorError
from src.core.shared_types import AdvisorSource, Difficulty, Player
from src.othello.board import Board
from src.othello.cell import Position
from src.othello.game import AdvisorRequest
from src.othello.moves import get_valid_moves


# --- MOCK HTTP SESSION ---
class MockResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self) -> Any:
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class MockSession:
    """Records the posted requests, answers with a canned response (or raises)"""

    def __init__(self, response: MockResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.posted: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> MockResponse:
        self.posted.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def completion(content: Any) -> MockResponse:
    return MockResponse({"choices": [{"message": {"role": "assistant", "content": content}}]})


def make_advisor(session: MockSession, api_key: str = "secret") -> LLMAdvisor:
    return LLMAdvisor(
        url="http://advisor.test/v1/chat/completions",
        api_key=api_key,
        model="test-model",
        timeout=3.0,
        session=session,  # type: ignore[arg-type]
    )


@pytest.fixture
def request_initial() -> AdvisorRequest:
    board = Board.initial()
    return AdvisorRequest(
        request_id=uuid4(),
        board=board,
        player=Player.BLACK,
        valid_moves=tuple(get_valid_moves(board, Player.BLACK)),
        difficulty=Difficulty.HARD,
    )


# -- Prompt --
def test_board_to_prompt() -> None:
    lines = board_to_prompt(Board.initial()).splitlines()
    assert len(lines) == 8
    assert lines[0] == "0: [. . . . . . . .]"
    assert lines[3] == "3: [. . . W B . . .]"


def test_build_prompt(request_initial: AdvisorRequest) -> None:
    prompt = build_prompt(request_initial)
    assert "as Black (B)" in prompt
    assert "Valid moves for your turn: (2, 3), (3, 2), (4, 5), (5, 4)" in prompt
    assert "advanced Othello strategy" in prompt


# -- Reply parsing --
@pytest.mark.parametrize(
    "text, expected",
    [
        ('{"row": 2, "col": 3}', (2, 3, "")),
        (
            'Sure! Here is my move:\n```json\n{"row": 5, "col": 4, "reasoning": "keeps mobility"}\n```',
            (5, 4, "keeps mobility"),
        ),
    ],
)
def test_parse_reply(text: str, expected: tuple[int, int, str]) -> None:
    reply = parse_reply(text)
    assert (reply.row, reply.col, reply.reasoning) == expected


@pytest.mark.parametrize(
    "text",
    [
        "I would play d6",  # no JSON at all
        "{not json}",
        '{"row": "top", "col": 3}',  # wrong type
        '{"col": 3}',  # missing field
    ],
)
def test_parse_invalid_reply(text: str) -> None:
    with pytest.raises(AdvisorError):
        parse_reply(text)


# -- HTTP client --
def test_suggest_move(request_initial: AdvisorRequest) -> None:
    session = MockSession(completion('{"row": 3, "col": 2, "reasoning": "center"}'))
    suggestion = make_advisor(session).suggest_move(request_initial)

    assert suggestion.position == Position(3, 2)
    assert suggestion.reasoning == "center"
    assert suggestion.source == AdvisorSource.AI

    posted = session.posted[0]
    assert posted["url"] == "http://advisor.test/v1/chat/completions"
    assert posted["timeout"] == 3.0
    assert posted["headers"]["Authorization"] == "Bearer secret"
    assert posted["json"]["model"] == "test-model"
    assert [message["role"] for message in posted["json"]["messages"]] == ["system", "user"]


def test_no_auth_header_without_key(request_initial: AdvisorRequest) -> None:
    session = MockSession(completion('{"row": 3, "col": 2}'))
    make_advisor(session, api_key="").suggest_move(request_initial)
    assert "Authorization" not in session.posted[0]["headers"]


def test_suggestion_is_not_checked_for_legality(request_initial: AdvisorRequest) -> None:
    """The client only parses. Legality is checked by resolve_advisor_move."""
    session = MockSession(completion('{"row": 0, "col": 0}'))
    suggestion = make_advisor(session).suggest_move(request_initial)
    assert suggestion.position == Position(0, 0)


@pytest.mark.parametrize(
    "session",
    [
        MockSession(error=requests.Timeout("timed out")),
        MockSession(error=requests.ConnectionError("refused")),
        MockSession(MockResponse({"error": "overloaded"}, status_code=503)),
        MockSession(MockResponse(ValueError("not json"))),
        MockSession(MockResponse({"choices": []})),
        MockSession(MockResponse({"unexpected": "shape"})),
        MockSession(completion(None)),
        MockSession(completion("no idea")),
    ],
)
def test_failures_become_advisor_errors(
    session: MockSession, request_initial: AdvisorRequest
) -> None:
    with pytest.raises(AdvisorError):
        make_advisor(session).suggest_move(request_initial)

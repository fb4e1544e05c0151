"""Settings read from the environment (or a .env file). All of them have a default, so importing never fails."""

import os

from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.environ.get("OTHELLO_DATABASE_URL", "sqlite:///othello.db")
DATABASE_ECHO = _get_bool("OTHELLO_DATABASE_ECHO", False)

ADVISOR_URL = os.environ.get(
    "OTHELLO_ADVISOR_URL", "http://localhost:8080/v1/chat/completions"
)
ADVISOR_API_KEY = os.environ.get("OTHELLO_ADVISOR_API_KEY", "")
ADVISOR_MODEL = os.environ.get("OTHELLO_ADVISOR_MODEL", "default")
ADVISOR_TIMEOUT = float(os.environ.get("OTHELLO_ADVISOR_TIMEOUT", "10"))

# On EASY, this share of the computer's moves is picked locally instead of asking the remote advisor
EASY_LOCAL_SHARE = float(os.environ.get("OTHELLO_EASY_LOCAL_SHARE", "0.5"))

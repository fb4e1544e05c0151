"""Wire the service to its production collaborators"""

import random
from typing import Optional

import requests
from sqlalchemy.orm import Session

from src.advisor.base import TieredAdvisor
from src.advisor.heuristic import HeuristicAdvisor
from src.advisor.llm import LLMAdvisor
from src.core import config
from src.db.sql_repository import SQLGameRepository, SQLPreferenceRepository
from src.services.othello_service import OthelloService

# One connection pool to the advisor for the whole process, shared by all services (like the database engine)
advisor_http_session = requests.Session()


def build_service(
    db_session: Session, rng: Optional[random.Random] = None
) -> OthelloService:
    """
    One service per database session (see src.db.database.get_db).

    NOTE the same RNG drives the EASY split, the heuristic tie-breaks and the random fallback,
    so a seeded RNG makes the computer's play reproducible (apart from the remote advisor itself).
    """
    rng = rng or random.Random()
    advisor = TieredAdvisor(
        remote=LLMAdvisor(session=advisor_http_session),
        local=HeuristicAdvisor(rng),
        rng=rng,
        easy_local_share=config.EASY_LOCAL_SHARE,
    )
    return OthelloService(
        repository=SQLGameRepository(db_session),
        preferences=SQLPreferenceRepository(db_session),
        advisor=advisor,
        rng=rng,
    )

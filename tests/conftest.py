"""
Fixtures shared by the test modules (pytest picks up conftest.py automatically).
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.database import init_db
from src.db.schema import Base

# In-memory SQLite: StaticPool keeps the single connection, otherwise every session would see an empty database
engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Session on fresh games / preferences tables. Tables are dropped at teardown, tests stay independent."""
    init_db(engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

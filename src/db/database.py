"""Database engine and sessions, configured from src.core.config"""

from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core import config
from src.db.schema import Base


def _connect_args(url: str) -> dict[str, bool]:
    # SQLite connections are created in one thread and may be used from another one
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    config.DATABASE_URL,
    echo=config.DATABASE_ECHO,
    connect_args=_connect_args(config.DATABASE_URL),
)
SessionLocal = sessionmaker(bind=engine, autoflush=False)


def init_db(bind: Engine = engine) -> None:
    """Create the games and preferences tables if they do not exist yet."""
    Base.metadata.create_all(bind=bind)


def get_db() -> Generator[Session, None, None]:
    """
    One session per unit of work.
    ----

    Usage:
        init_db()
        with contextlib.contextmanager(get_db)() as db:
            service = build_service(db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from models.database import Base


@lru_cache()
def get_engine(database_url: str, echo: bool = False) -> Engine:
    """Build (once per URL) the engine backing the race marker table."""
    if database_url.startswith("sqlite"):
        # SQLite connections are shared with the request thread pool
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=5,
        max_overflow=10
    )


def init_db(engine: Engine):
    """Create the race marker table. Called on application startup."""
    Base.metadata.create_all(bind=engine)


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Open a session for a single request and always close it."""
    db = sessionmaker(autoflush=False, bind=engine)()
    try:
        yield db
    finally:
        db.close()

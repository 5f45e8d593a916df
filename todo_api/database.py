import logging
from contextlib import contextmanager
from typing import Iterator, Union

from fastapi import Request
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlmodel import SQLModel, create_engine

from .config import DATABASE_URL

# Import all models to ensure they are registered with SQLModel metadata
from .models import Task  # noqa: F401

logger = logging.getLogger(__name__)

POOL_SIZE = 10
POOL_TIMEOUT = 30


def _create_engine(url: Union[str, URL]) -> Engine:
    url = make_url(url)
    if url.get_backend_name() == "sqlite":
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    # Bounded pool: requests queue for a free connection up to POOL_TIMEOUT seconds
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_size=POOL_SIZE,
        max_overflow=0,
        pool_timeout=POOL_TIMEOUT,
    )


class Database:
    """Owns the engine and connection pool for the tasks table.

    One instance is built at startup and attached to the application; every
    request checks out its own session through :func:`get_db`.
    """

    def __init__(self, url: Union[str, URL] = DATABASE_URL):
        self.engine = _create_engine(url)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        """Get a database session (context manager style).

        The session is closed, and its connection returned to the pool, on
        every exit path.
        """
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    def create_tables(self) -> None:
        """Create all database tables. Safe to call on an existing schema."""
        SQLModel.metadata.create_all(bind=self.engine)
        logger.info("Tasks table ensured on %s", self.engine.url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """Dependency to get database session."""
    database: Database = request.app.state.database
    with database.get_session() as db:
        yield db

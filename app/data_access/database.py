import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings
from app.core.exceptions import StorageUnavailableError

# Registers the faculty table on SQLModel.metadata
from app.data_access import models  # noqa: F401


logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Creates an engine suited to the configured backend.

    SQLite needs cross-thread access for FastAPI's threadpool, and in-memory
    databases must share a single connection to stay alive.
    """
    options: dict[str, Any] = {"echo": echo}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url == "sqlite://":
            options["poolclass"] = StaticPool
    else:
        # Use pool_pre_ping so dropped server connections are replaced
        options["pool_pre_ping"] = True
    return create_engine(database_url, **options)


engine = build_engine(settings.DATABASE_URL, settings.DATABASE_ECHO)


def create_db_and_tables(target: Engine | None = None) -> None:
    """Creates the faculty table and its indexes if they don't exist."""
    SQLModel.metadata.create_all(target or engine)
    logger.info("Database tables created successfully.")


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency to provide a database session."""
    with Session(engine) as session:
        yield session


@contextmanager
def storage_guard(session: Session, action: str) -> Iterator[None]:
    """Rolls back and re-raises store failures as StorageUnavailableError.

    Args:
        session (Session): The session the wrapped block works with.
        action (str): Human-readable name of the operation, used in the error.
    """
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Storage failure during {action}: {e!s}")
        raise StorageUnavailableError(action) from e

"""Database connection and session management.

This module builds engines and session factories for the relational store.
Nothing here is cached at module level: callers own the engine they create
and pass the session factory into the repositories that need it.
"""

import logging
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from charsheet.models import Base

logger = logging.getLogger(__name__)


def _configure_sqlite(
    dbapi_connection: Any, connection_record: Any  # noqa: ARG001
) -> None:
    """Configure SQLite to use WAL mode and enforce foreign keys.

    Args:
        dbapi_connection: The DBAPI connection
        connection_record: Connection record (required by SQLAlchemy event API)
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create and configure a database engine.

    Args:
        database_url: SQLAlchemy URL, e.g. ``sqlite:///data/charsheet.db``
        echo: Log every SQL statement

    Returns:
        Engine: Configured SQLAlchemy engine

    Note:
        File-backed SQLite databases get their parent directory created and
        WAL mode enabled.  In-memory SQLite shares one connection across
        threads so every session sees the same data.
    """
    url = make_url(database_url)

    if url.get_backend_name() != "sqlite":
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    if url.database in (None, "", ":memory:"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _configure_sqlite)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``.

    ``expire_on_commit`` is disabled so records stay readable after commit.
    """
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def init_db(engine: Engine) -> None:
    """Initialize the database by creating all tables.

    Note:
        This creates tables directly without migrations. For long-lived
        databases, use the alembic migrations instead.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("database schema ensured on %s", engine.url.render_as_string(hide_password=True))


def check_database_health(engine: Engine) -> bool:
    """Check if the database is accessible.

    Returns:
        bool: True if a trivial query succeeds, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("database health check failed")
        return False
    return True


def get_table_names(engine: Engine) -> list[str]:
    """Get list of all table names in the database."""
    return inspect(engine).get_table_names()

"""Integration tests for database functionality.

Tests engine creation, table initialization, the health check and the
alembic migration against file-backed SQLite databases.
"""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import inspect, text

from charsheet.database import (
    check_database_health,
    create_db_engine,
    get_table_names,
    init_db,
)
from charsheet.models import Base


@pytest.fixture(scope="module")
def project_root():
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent


def test_engine_creates_parent_directory(tmp_path):
    db_path = tmp_path / "nested" / "dir" / "charsheet.db"
    engine = create_db_engine(f"sqlite:///{db_path}")
    try:
        init_db(engine)
        assert db_path.exists()
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
    finally:
        engine.dispose()


def test_init_db_creates_tables(engine):
    assert set(get_table_names(engine)) >= {"characters", "srd_spells"}
    assert check_database_health(engine) is True


def test_health_check_reports_failure(tmp_path):
    # A directory cannot be opened as a database file.
    engine = create_db_engine(f"sqlite:///{tmp_path}")
    try:
        assert check_database_health(engine) is False
    finally:
        engine.dispose()


def test_migration_matches_models(project_root, tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    config = Config()
    config.set_main_option("script_location", str(project_root / "alembic"))
    config.set_main_option("sqlalchemy.url", url)

    command.upgrade(config, "head")

    engine = create_db_engine(url)
    try:
        inspector = inspect(engine)
        for table in Base.metadata.sorted_tables:
            migrated = {column["name"] for column in inspector.get_columns(table.name)}
            assert migrated == {column.name for column in table.columns}
        slug_indexes = [
            index for index in inspector.get_indexes("characters") if index["column_names"] == ["slug"]
        ]
        assert slug_indexes and slug_indexes[0]["unique"]
    finally:
        engine.dispose()

    command.downgrade(config, "base")
    engine = create_db_engine(url)
    try:
        assert "characters" not in get_table_names(engine)
    finally:
        engine.dispose()

"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`charsheet` package (e.g., `from charsheet.api.app import create_app`)
without requiring an editable install in CI.  It also provides the
fixtures shared by the unit and integration suites.
"""

import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from charsheet.database import create_db_engine, create_session_factory, init_db  # noqa: E402
from charsheet.repository import JsonCharacterRepository, SqlCharacterRepository  # noqa: E402


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite:///:memory:")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture(params=["sql", "json"])
def character_repository(request, session_factory, tmp_path):
    """Each contract test runs once per storage backend."""
    if request.param == "sql":
        return SqlCharacterRepository(session_factory)
    return JsonCharacterRepository(tmp_path / "characters")


@pytest.fixture
def character_payload() -> dict[str, object]:
    return {
        "name": "Gandalf the Grey",
        "race": "Maia",
        "class": "Wizard",
        "level": 5,
        "ability_scores": {"STR": 10, "DEX": 14, "CON": 12, "INT": 18, "WIS": 16, "CHA": 13},
        "hp": {"current": 32, "max": 32, "temp": 0},
        "spell_slots": [
            {"level": 1, "available": 4, "used": 0},
            {"level": 2, "available": 3, "used": 0},
        ],
        "equipment": [
            {"name": "Quarterstaff", "quantity": 1, "weight": 4.0, "equipped": True},
            {"name": "Rations", "quantity": 5, "weight": 2.0},
        ],
        "saving_throw_proficiencies": ["INT", "WIS"],
        "notes": "You shall not pass.",
    }

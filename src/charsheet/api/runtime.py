"""Runtime primitives backing the character sheet HTTP API."""

from __future__ import annotations

import logging

from charsheet.config import Settings, get_settings
from charsheet.database import create_db_engine, create_session_factory, init_db
from charsheet.factory import create_character_service, create_spell_service, create_srd_client

logger = logging.getLogger(__name__)


class ApiState:
    """Aggregated services shared by the FastAPI layer.

    Owns the database engine and the SRD HTTP client; both are released by
    :meth:`shutdown`.
    """

    def __init__(self, *, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.engine = create_db_engine(
            self.settings.database_url, echo=self.settings.database_echo
        )
        init_db(self.engine)
        self.session_factory = create_session_factory(self.engine)
        self.srd_client = create_srd_client(self.settings)
        self.characters = create_character_service(self.settings, self.session_factory)
        self.spells = create_spell_service(
            self.settings, self.session_factory, client=self.srd_client
        )
        logger.info(
            "API state ready (storage=%s)", self.settings.storage_backend.value
        )

    async def shutdown(self) -> None:
        self.srd_client.close()
        self.engine.dispose()
        logger.info("API state shut down")


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()

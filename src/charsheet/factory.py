"""Service Factory for the character sheet manager.

This module wires repositories, the SRD client and services together from
:class:`~charsheet.config.Settings`.  Use these functions in production code;
in tests, construct the services directly with protocol-based fakes.

Example:
    # Production usage
    from charsheet.factory import create_character_service
    characters = create_character_service(settings, session_factory)

    # Testing usage
    from charsheet.services import CharacterService

    class FakeRepository:
        def find_by_id(self, character_id):
            return None
        ...

    characters = CharacterService(FakeRepository())
"""

from sqlalchemy.orm import Session, sessionmaker

from charsheet.config import Settings
from charsheet.domain.enums import StorageBackend
from charsheet.interfaces import ICharacterRepository
from charsheet.repository import (
    JsonCharacterRepository,
    SqlCharacterRepository,
    SqlSpellRepository,
)
from charsheet.services import CharacterService, SpellService, SrdClient


def create_character_repository(
    settings: Settings, session_factory: sessionmaker[Session]
) -> ICharacterRepository:
    """Create the character repository selected by ``settings.storage_backend``.

    Args:
        settings: Runtime settings
        session_factory: Session factory for the relational store

    Returns:
        A SQL-backed repository, or a JSON snapshot repository under
        ``settings.data_dir``
    """
    if settings.storage_backend is StorageBackend.JSON:
        return JsonCharacterRepository(
            settings.data_dir, slug_max_attempts=settings.slug_max_attempts
        )
    return SqlCharacterRepository(session_factory, slug_max_attempts=settings.slug_max_attempts)


def create_character_service(
    settings: Settings, session_factory: sessionmaker[Session]
) -> CharacterService:
    """Create a CharacterService with all dependencies.

    Args:
        settings: Runtime settings
        session_factory: Session factory for the relational store

    Returns:
        Fully initialized CharacterService
    """
    return CharacterService(create_character_repository(settings, session_factory))


def create_srd_client(settings: Settings) -> SrdClient:
    """Create an SrdClient pointed at ``settings.srd_api_base``."""
    return SrdClient(settings.srd_api_base, timeout=settings.srd_timeout_seconds)


def create_spell_service(
    settings: Settings,
    session_factory: sessionmaker[Session],
    *,
    client: SrdClient | None = None,
) -> SpellService:
    """Create a SpellService with all dependencies.

    Args:
        settings: Runtime settings
        session_factory: Session factory for the spell cache table
        client: Optional pre-built SRD client

    Returns:
        Fully initialized SpellService with a SQL cache and SRD client
    """
    return SpellService(
        SqlSpellRepository(session_factory),
        client or create_srd_client(settings),
    )

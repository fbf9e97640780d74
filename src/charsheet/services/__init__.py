"""Service layer for the character sheet manager.

Services depend on the Protocols in :mod:`charsheet.interfaces`, so tests can
pass in fakes.  Production wiring lives in :mod:`charsheet.factory`.
"""

from charsheet.services.character_service import CharacterService
from charsheet.services.spell_service import SpellService
from charsheet.services.srd_client import SrdClient, map_api_spell

__all__ = [
    "CharacterService",
    "SpellService",
    "SrdClient",
    "map_api_spell",
]

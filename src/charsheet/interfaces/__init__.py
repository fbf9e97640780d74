"""Protocol interfaces for dependency inversion.

Services depend on these protocols rather than on concrete storage or HTTP
clients, so tests can inject in-memory fakes.
"""

from charsheet.interfaces.characters import ICharacterRepository
from charsheet.interfaces.spells import ISpellRepository, ISrdClient

__all__ = [
    "ICharacterRepository",
    "ISpellRepository",
    "ISrdClient",
]

"""Character Repository Protocol Interface.

This module defines the storage contract the character service depends on.
"""

from typing import Protocol

from charsheet.domain import models as dm
from charsheet.schemas import CharacterCreate, CharacterUpdate


class ICharacterRepository(Protocol):
    """Protocol for persisting character sheets.

    Implementations own physical storage only and never apply game rules.
    Ids and slugs are unique across live records.  A missing record is
    reported by returning ``None`` (or ``False`` for deletes), never by
    raising.
    """

    def create(self, data: CharacterCreate) -> dm.Character:
        """Persist a new character.

        Assigns a fresh id, derives a slug from the name and stamps
        ``created_at`` and ``updated_at`` with the same instant.

        Raises:
            SlugCollisionError: No free slug within the configured attempts.
        """
        ...

    def find_by_id(self, character_id: str) -> dm.Character | None:
        ...

    def find_by_slug(self, slug: str) -> dm.Character | None:
        ...

    def find_all(self) -> list[dm.Character]:
        """Return every character; order is not part of the contract."""
        ...

    def update(self, character_id: str, patch: CharacterUpdate) -> dm.Character | None:
        """Merge the fields present in ``patch`` into the stored record.

        Keeps ``id``, ``slug`` and ``created_at`` and advances ``updated_at``.
        Returns ``None`` without writing if the character does not exist.
        """
        ...

    def delete(self, character_id: str) -> bool:
        """Remove a character; ``True`` only if a record existed."""
        ...

    def clear(self) -> None:
        """Remove every character (tests and maintenance only)."""
        ...

"""SRD Spell Cache Protocol Interfaces.

This module defines the contracts the spell service depends on: the local
cache and the upstream SRD API client.
"""

from collections.abc import Iterable
from typing import Protocol

from charsheet.schemas import SpellFilters, SrdSpell


class ISpellRepository(Protocol):
    """Protocol for the local spell cache keyed by SRD index."""

    def upsert_spells(self, spells: Iterable[SrdSpell]) -> int:
        """Insert or replace spells; returns how many were written."""
        ...

    def get_all(self) -> list[SrdSpell]:
        ...

    def get_by_index(self, index: str) -> SrdSpell | None:
        ...

    def search(self, filters: SpellFilters) -> list[SrdSpell]:
        ...

    def clear(self) -> None:
        ...


class ISrdClient(Protocol):
    """Protocol for reading spells from the SRD API."""

    def list_spell_indexes(self) -> list[str]:
        """Return every spell index the API knows.

        Raises:
            SrdFetchError: The list request did not succeed.
        """
        ...

    def get_spell(self, index: str) -> SrdSpell:
        """Fetch and map one spell.

        Raises:
            httpx.HTTPError: The request failed or returned an error status.
        """
        ...

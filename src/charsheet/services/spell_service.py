"""SRD Spell Cache Service.

Spells are read from the local cache.  The first read against an empty cache
populates it from the SRD API: the spell list is fetched, then every spell's
detail document.  Details that fail to load are logged and skipped so one bad
entry never aborts the whole fetch, whereas a failing list request does.
"""

from __future__ import annotations

import logging

import httpx

from charsheet.interfaces import ISpellRepository, ISrdClient
from charsheet.schemas import SpellFilters, SrdSpell

logger = logging.getLogger(__name__)


class SpellService:
    """Read-through cache in front of the SRD spell API."""

    def __init__(self, repository: ISpellRepository, client: ISrdClient) -> None:
        self.repository = repository
        self.client = client

    def fetch_and_cache(self) -> int:
        """Download every spell and store it; returns how many were cached.

        Raises:
            SrdFetchError: The spell list request failed.
        """

        logger.info("fetching spells from the SRD API")
        indexes = self.client.list_spell_indexes()
        logger.info("SRD API lists %d spells", len(indexes))

        spells: list[SrdSpell] = []
        for index in indexes:
            try:
                spells.append(self.client.get_spell(index))
            except (httpx.HTTPError, ValueError, TypeError, AttributeError) as exc:
                # Non-JSON bodies and wrongly shaped payloads end up as one of the
                # last three (ValidationError and JSONDecodeError are ValueErrors).
                logger.warning("skipping spell %s: %s", index, exc)

        cached = self.repository.upsert_spells(spells) if spells else 0
        logger.info("cached %d of %d spells", cached, len(indexes))
        return cached

    def get_spells(self, filters: SpellFilters | None = None) -> list[SrdSpell]:
        spells = self.repository.get_all()
        if not spells:
            logger.info("spell cache is empty, populating it")
            self.fetch_and_cache()
            spells = self.repository.get_all()

        if filters is None or filters.is_empty():
            return spells
        return self.repository.search(filters)

    def get_spell(self, index: str) -> SrdSpell | None:
        spell = self.repository.get_by_index(index)
        if spell is None:
            logger.info("spell %s is not cached", index)
        return spell

    def refresh_cache(self) -> int:
        """Drop the cache and fetch everything again."""

        logger.info("refreshing the spell cache")
        self.repository.clear()
        return self.fetch_and_cache()

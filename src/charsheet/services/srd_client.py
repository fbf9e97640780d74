"""HTTP client for the public D&D 5e SRD spell endpoints."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from charsheet.errors import SrdFetchError
from charsheet.schemas import SrdSpell

logger = logging.getLogger(__name__)


def map_api_spell(detail: dict[str, Any]) -> SrdSpell:
    """Map an SRD spell detail document onto :class:`SrdSpell`.

    ``desc`` paragraphs are joined with newlines, ``school`` and ``classes``
    are reduced to their display names.

    Raises:
        pydantic.ValidationError: Required fields are missing or malformed.
    """

    school = detail.get("school") or {}
    return SrdSpell.model_validate(
        {
            "index": detail.get("index"),
            "name": detail.get("name"),
            "level": detail.get("level"),
            "school": school.get("name"),
            "casting_time": detail.get("casting_time"),
            "range": detail.get("range"),
            "duration": detail.get("duration"),
            "description": "\n".join(detail.get("desc") or []),
            "classes": [entry["name"] for entry in detail.get("classes") or [] if "name" in entry],
        }
    )


class SrdClient:
    """Synchronous SRD API client.

    ``transport`` is passed through to :class:`httpx.Client` so tests can use
    :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def list_spell_indexes(self) -> list[str]:
        response = self._client.get(self.base_url)
        if response.is_error:
            logger.error("SRD spell list returned %d", response.status_code)
            raise SrdFetchError(response.status_code, self.base_url)
        results = response.json().get("results", [])
        return [entry["index"] for entry in results]

    def get_spell(self, index: str) -> SrdSpell:
        response = self._client.get(f"{self.base_url}/{index}")
        response.raise_for_status()
        return map_api_spell(response.json())

"""Helpers shared by every character repository implementation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from pydantic import TypeAdapter

from charsheet.domain import models as dm
from charsheet.domain.slug import generate_slug
from charsheet.errors import SlugCollisionError
from charsheet.schemas import CharacterCreate, CharacterUpdate

logger = logging.getLogger(__name__)

CHARACTER_ADAPTER: TypeAdapter[dm.Character] = TypeAdapter(dm.Character)


def allocate_slug(name: str, is_taken: Callable[[str], bool], max_attempts: int) -> str:
    """Generate slugs for ``name`` until one is free.

    Raises:
        SlugCollisionError: Every attempt produced a slug already in use.
    """

    for attempt in range(1, max_attempts + 1):
        slug = generate_slug(name)
        if not is_taken(slug):
            return slug
        logger.warning("slug %s already taken (attempt %d/%d)", slug, attempt, max_attempts)
    raise SlugCollisionError(name, max_attempts)


def new_character(
    data: CharacterCreate, *, character_id: str, slug: str, now: datetime
) -> dm.Character:
    """Build the domain record for freshly created character data."""

    payload = data.model_dump()
    payload.update(id=character_id, slug=slug, created_at=now, updated_at=now)
    return CHARACTER_ADAPTER.validate_python(payload)


def merge_patch(character: dm.Character, patch: CharacterUpdate, *, now: datetime) -> dm.Character:
    """Overwrite the fields present in ``patch``; everything else is preserved.

    ``updated_at`` never moves backwards, even if the clock does.
    """

    payload = CHARACTER_ADAPTER.dump_python(character)
    payload.update(patch.changes())
    payload["id"] = character.id
    payload["slug"] = character.slug
    payload["created_at"] = character.created_at
    payload["updated_at"] = max(now, character.updated_at)
    return CHARACTER_ADAPTER.validate_python(payload)

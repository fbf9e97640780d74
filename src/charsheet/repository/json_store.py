"""JSON-based repository for characters."""

from __future__ import annotations

from pathlib import Path
from uuid import UUID, uuid4

from charsheet.domain import models as dm
from charsheet.models import utc_now
from charsheet.schemas import CharacterCreate, CharacterUpdate

from .common import CHARACTER_ADAPTER, allocate_slug, merge_patch, new_character


class JsonCharacterRepository:
    """Persist characters as JSON snapshots on disk, one file per character."""

    def __init__(self, base_path: Path, *, slug_max_attempts: int = 3) -> None:
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._slug_max_attempts = slug_max_attempts

    def _path_for(self, character_id: str) -> Path | None:
        # Only the canonical UUID string maps to a file; aliases such as
        # upper case or braces do not name a stored character.
        try:
            canonical = str(UUID(character_id))
        except ValueError:
            return None
        if canonical != character_id:
            return None
        return self.base_path / f"character_{canonical}.json"

    def _save(self, character: dm.Character) -> Path:
        path = self.base_path / f"character_{character.id}.json"
        path.write_bytes(CHARACTER_ADAPTER.dump_json(character, indent=2))
        return path

    def _load(self, path: Path) -> dm.Character:
        return CHARACTER_ADAPTER.validate_json(path.read_bytes())

    def create(self, data: CharacterCreate) -> dm.Character:
        taken = {c.slug for c in self.find_all() if c.slug is not None}
        slug = allocate_slug(data.name, taken.__contains__, self._slug_max_attempts)
        character = new_character(data, character_id=str(uuid4()), slug=slug, now=utc_now())
        self._save(character)
        return character

    def find_by_id(self, character_id: str) -> dm.Character | None:
        path = self._path_for(character_id)
        if path is None or not path.exists():
            return None
        return self._load(path)

    def find_by_slug(self, slug: str) -> dm.Character | None:
        return next((c for c in self.find_all() if c.slug == slug), None)

    def find_all(self) -> list[dm.Character]:
        """Return all persisted characters, oldest first."""

        characters = [self._load(path) for path in self.base_path.glob("character_*.json")]
        return sorted(characters, key=lambda c: (c.created_at, c.id))

    def update(self, character_id: str, patch: CharacterUpdate) -> dm.Character | None:
        current = self.find_by_id(character_id)
        if current is None:
            return None
        merged = merge_patch(current, patch, now=utc_now())
        self._save(merged)
        return merged

    def delete(self, character_id: str) -> bool:
        """Remove a character snapshot if it exists."""

        path = self._path_for(character_id)
        if path is None or not path.exists():
            return False
        path.unlink()
        return True

    def clear(self) -> None:
        for path in self.base_path.glob("character_*.json"):
            path.unlink()

"""SQLAlchemy-backed character repository."""

from __future__ import annotations

import logging
from uuid import uuid4

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, sessionmaker

from charsheet.domain import models as dm
from charsheet.models import CharacterRecord, as_utc, utc_now
from charsheet.schemas import CharacterCreate, CharacterUpdate

from .common import CHARACTER_ADAPTER, allocate_slug, merge_patch, new_character

logger = logging.getLogger(__name__)

_JSON_FIELDS = (
    "ability_scores",
    "hp",
    "spell_slots",
    "equipment",
    "skills",
    "armor_class",
    "saving_throw_proficiencies",
)
_SCALAR_FIELDS = ("name", "race", "character_class", "level", "notes")


def _to_domain(record: CharacterRecord) -> dm.Character:
    payload: dict[str, object] = {
        "id": record.id,
        "slug": record.slug,
        "created_at": as_utc(record.created_at),
        "updated_at": as_utc(record.updated_at),
    }
    for name in (*_SCALAR_FIELDS, *_JSON_FIELDS):
        payload[name] = getattr(record, name)
    return CHARACTER_ADAPTER.validate_python(payload)


def _write_record(record: CharacterRecord, character: dm.Character) -> None:
    payload = CHARACTER_ADAPTER.dump_python(character, mode="json")
    for name in (*_SCALAR_FIELDS, *_JSON_FIELDS):
        setattr(record, name, payload[name])
    record.created_at = character.created_at
    record.updated_at = character.updated_at


class SqlCharacterRepository:
    """Persist characters in the ``characters`` table.

    Each operation opens its own session from the injected factory and
    commits before returning.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        slug_max_attempts: int = 3,
    ) -> None:
        self._session_factory = session_factory
        self._slug_max_attempts = slug_max_attempts

    def create(self, data: CharacterCreate) -> dm.Character:
        with self._session_factory() as session:

            def slug_taken(slug: str) -> bool:
                stmt = select(CharacterRecord.id).where(CharacterRecord.slug == slug)
                return session.scalar(stmt) is not None

            slug = allocate_slug(data.name, slug_taken, self._slug_max_attempts)
            character = new_character(data, character_id=str(uuid4()), slug=slug, now=utc_now())

            record = CharacterRecord(id=character.id, slug=character.slug)
            _write_record(record, character)
            session.add(record)
            session.commit()

        logger.debug("inserted character %s (%s)", character.id, character.slug)
        return character

    def find_by_id(self, character_id: str) -> dm.Character | None:
        with self._session_factory() as session:
            record = session.get(CharacterRecord, character_id)
            return _to_domain(record) if record is not None else None

    def find_by_slug(self, slug: str) -> dm.Character | None:
        with self._session_factory() as session:
            stmt = select(CharacterRecord).where(CharacterRecord.slug == slug)
            record = session.scalars(stmt).first()
            return _to_domain(record) if record is not None else None

    def find_all(self) -> list[dm.Character]:
        with self._session_factory() as session:
            stmt = select(CharacterRecord).order_by(
                CharacterRecord.created_at, CharacterRecord.id
            )
            return [_to_domain(record) for record in session.scalars(stmt)]

    def update(self, character_id: str, patch: CharacterUpdate) -> dm.Character | None:
        with self._session_factory() as session:
            record = session.get(CharacterRecord, character_id)
            if record is None:
                return None

            merged = merge_patch(_to_domain(record), patch, now=utc_now())
            _write_record(record, merged)
            session.commit()
            return merged

    def delete(self, character_id: str) -> bool:
        with self._session_factory() as session:
            record = session.get(CharacterRecord, character_id)
            if record is None:
                return False
            session.delete(record)
            session.commit()
            return True

    def clear(self) -> None:
        with self._session_factory() as session:
            session.execute(delete(CharacterRecord))
            session.commit()

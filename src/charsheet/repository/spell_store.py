"""SQLAlchemy-backed cache of SRD spells."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, sessionmaker

from charsheet.models import SrdSpellRecord, as_utc, utc_now
from charsheet.schemas import SpellFilters, SrdSpell


def _to_schema(record: SrdSpellRecord) -> SrdSpell:
    return SrdSpell(
        index=record.index,
        name=record.name,
        level=record.level,
        school=record.school,
        casting_time=record.casting_time,
        range=record.spell_range,
        duration=record.duration,
        description=record.description,
        classes=list(record.classes),
        cached_at=as_utc(record.cached_at),
    )


class SqlSpellRepository:
    """Read and write the ``srd_spells`` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def upsert_spells(self, spells: Iterable[SrdSpell]) -> int:
        # The last entry wins when the batch repeats an index; pending rows are
        # not flushed, so session.get would miss the earlier one.
        unique = {spell.index: spell for spell in spells}
        written = 0
        with self._session_factory() as session:
            for spell in unique.values():
                record = session.get(SrdSpellRecord, spell.index)
                if record is None:
                    record = SrdSpellRecord(index=spell.index)
                    session.add(record)
                record.name = spell.name
                record.level = spell.level
                record.school = spell.school
                record.casting_time = spell.casting_time
                record.spell_range = spell.range
                record.duration = spell.duration
                record.description = spell.description
                record.classes = list(spell.classes)
                record.cached_at = spell.cached_at or utc_now()
                written += 1
            session.commit()
        return written

    def get_all(self) -> list[SrdSpell]:
        with self._session_factory() as session:
            stmt = select(SrdSpellRecord).order_by(SrdSpellRecord.level, SrdSpellRecord.name)
            return [_to_schema(record) for record in session.scalars(stmt)]

    def get_by_index(self, index: str) -> SrdSpell | None:
        with self._session_factory() as session:
            record = session.get(SrdSpellRecord, index)
            return _to_schema(record) if record is not None else None

    def search(self, filters: SpellFilters) -> list[SrdSpell]:
        """Return spells matching every filter that is set.

        Name matching is a case-insensitive substring search.  Class
        membership is checked after loading because classes are a JSON list.
        """

        stmt = select(SrdSpellRecord).order_by(SrdSpellRecord.level, SrdSpellRecord.name)
        if filters.name is not None:
            stmt = stmt.where(SrdSpellRecord.name.icontains(filters.name, autoescape=True))
        if filters.level is not None:
            stmt = stmt.where(SrdSpellRecord.level == filters.level)
        if filters.school is not None:
            stmt = stmt.where(func.lower(SrdSpellRecord.school) == filters.school.lower())

        with self._session_factory() as session:
            spells = [_to_schema(record) for record in session.scalars(stmt)]

        if filters.class_name is not None:
            wanted = filters.class_name.lower()
            spells = [s for s in spells if any(c.lower() == wanted for c in s.classes)]
        return spells

    def clear(self) -> None:
        with self._session_factory() as session:
            session.execute(delete(SrdSpellRecord))
            session.commit()

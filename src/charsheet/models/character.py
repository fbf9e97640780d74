"""Character table.

Scalar attributes get their own columns; the nested parts of a sheet (ability
scores, hit points, spell slots, equipment, skills, armor class and saving
throw proficiencies) are stored as JSON documents.
"""

from typing import Any

from sqlalchemy import JSON, CheckConstraint, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class CharacterRecord(Base, TimestampMixin):
    """Represents one persisted character sheet.

    Attributes:
        id: Primary key (UUID string)
        slug: Unique share identifier, null for legacy rows
        name: Character name
        race: Character race
        character_class: Character class (column ``class``)
        level: Character level, 1-20
        ability_scores: JSON object keyed by ability abbreviation
        hp: JSON object with current/max/temp
        spell_slots: JSON list of slot pools
        equipment: JSON list of items
        skills: JSON list of skills
        armor_class: JSON object with base/override
        saving_throw_proficiencies: JSON list of ability keys
        notes: Free text
    """

    __tablename__ = "characters"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    slug: Mapped[str | None] = mapped_column(String(300), unique=True, nullable=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    race: Mapped[str] = mapped_column(String(100), nullable=False)
    character_class: Mapped[str] = mapped_column("class", String(100), nullable=False)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    ability_scores: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    hp: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    spell_slots: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    equipment: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    skills: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    armor_class: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    saving_throw_proficiencies: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (
        CheckConstraint("level BETWEEN 1 AND 20", name="ck_characters_level"),
    )

    def __repr__(self) -> str:
        return f"<CharacterRecord(id='{self.id}', name='{self.name}', level={self.level})>"

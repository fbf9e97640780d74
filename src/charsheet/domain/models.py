"""Dataclasses describing a character sheet.

These are plain in-memory value types.  The rule functions in
:mod:`charsheet.domain.rules` operate on them, and the repositories translate
between them and the underlying storage (SQLAlchemy rows or JSON snapshots).
Validation lives in :mod:`charsheet.schemas`; nothing here checks ranges.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import NewType

from .enums import AbilityKey

CharacterID = NewType("CharacterID", str)
EquipmentID = NewType("EquipmentID", str)


@dataclass(slots=True)
class AbilityScores:
    """The six ability scores of a character."""

    STR: int  # noqa: N815
    DEX: int  # noqa: N815
    CON: int  # noqa: N815
    INT: int  # noqa: N815
    WIS: int  # noqa: N815
    CHA: int  # noqa: N815

    def score(self, key: AbilityKey) -> int:
        return getattr(self, AbilityKey(key).value)


@dataclass(slots=True)
class HitPoints:
    current: int
    max: int
    temp: int = 0


@dataclass(slots=True)
class SpellSlot:
    """Per-level spell slot pool."""

    level: int
    available: int
    used: int = 0


@dataclass(slots=True)
class EquipmentItem:
    id: EquipmentID
    name: str
    quantity: int = 1
    weight: float = 0.0
    equipped: bool = False


@dataclass(slots=True)
class Skill:
    name: str
    ability_key: AbilityKey
    proficient: bool = False


@dataclass(slots=True)
class ArmorClass:
    """Base armor class plus an optional manual override."""

    base: float = 10
    override: float | None = None


@dataclass(slots=True)
class Character:
    """Root aggregate for a single character sheet."""

    id: CharacterID
    name: str
    race: str
    character_class: str
    level: int
    ability_scores: AbilityScores
    hp: HitPoints
    created_at: datetime
    updated_at: datetime
    slug: str | None = None
    spell_slots: list[SpellSlot] = field(default_factory=list)
    equipment: list[EquipmentItem] = field(default_factory=list)
    skills: list[Skill] = field(default_factory=list)
    armor_class: ArmorClass = field(default_factory=ArmorClass)
    saving_throw_proficiencies: list[AbilityKey] = field(default_factory=list)
    notes: str = ""


@dataclass(slots=True)
class CharacterStats:
    """Values derived from a character sheet for display."""

    armor_class: float
    proficiency_bonus: int
    ability_modifiers: dict[AbilityKey, int]
    saving_throws: dict[AbilityKey, int]
    skills: dict[str, int]
    total_weight: float

"""Validation schemas for characters and their sub-objects.

Every schema accepts both plain mappings and the domain dataclasses
(``from_attributes``), so the service layer can validate a rule result before
handing it to a repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from charsheet.domain.enums import AbilityKey
from charsheet.domain.skills import SKILLS

AbilityScore = Annotated[int, Field(ge=1, le=30)]

# JSON has no representation for inf or nan, so stored values must be finite.
FiniteFloat = Annotated[float, Field(allow_inf_nan=False)]

# ``class`` is a keyword: the attribute is ``character_class``, accepted under
# either name and serialized as ``class``.
CLASS_ALIAS = AliasChoices("class", "character_class")


class SchemaModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        allow_inf_nan=False,
    )


class AbilityScores(SchemaModel):
    STR: AbilityScore  # noqa: N815
    DEX: AbilityScore  # noqa: N815
    CON: AbilityScore  # noqa: N815
    INT: AbilityScore  # noqa: N815
    WIS: AbilityScore  # noqa: N815
    CHA: AbilityScore  # noqa: N815


class HitPoints(SchemaModel):
    current: int = Field(..., ge=0, description="Current hit points")
    max: int = Field(..., ge=1, description="Maximum hit points")
    temp: int = Field(default=0, ge=0, description="Temporary hit points")


class SpellSlot(SchemaModel):
    level: int = Field(..., ge=1, le=9, description="Spell level of the slot pool")
    available: int = Field(..., ge=0, description="Slots granted at this level")
    used: int = Field(default=0, ge=0, description="Slots already spent")

    @model_validator(mode="after")
    def _used_within_available(self) -> SpellSlot:
        if self.used > self.available:
            raise ValueError(
                f"used ({self.used}) cannot exceed available ({self.available})"
                f" for level {self.level}"
            )
        return self


class EquipmentItemCreate(SchemaModel):
    """Equipment as supplied by a user; the identifier is assigned on add."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(default=1, ge=1)
    weight: float = Field(default=0.0, ge=0.0, description="Weight of one unit in pounds")
    equipped: bool = False


class EquipmentItem(EquipmentItemCreate):
    id: str = Field(default_factory=lambda: str(uuid4()), min_length=1)


class Skill(SchemaModel):
    name: str = Field(..., min_length=1, max_length=100)
    ability_key: AbilityKey
    proficient: bool = False


class ArmorClass(SchemaModel):
    base: float = Field(default=10, description="Armor class before the DEX modifier")
    override: float | None = Field(default=None, description="Manual value that wins if set")


def default_skills() -> list[Skill]:
    """Return every SRD skill without proficiency."""

    return [Skill(name=name, ability_key=key) for name, key in SKILLS]


def _reject_duplicate_keys(keys: list[AbilityKey]) -> list[AbilityKey]:
    if len(set(keys)) != len(keys):
        raise ValueError("saving throw proficiencies must not repeat an ability")
    return keys


class CharacterCreate(SchemaModel):
    name: str = Field(..., min_length=1, max_length=255)
    race: str = Field(..., min_length=1, max_length=100)
    character_class: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias=CLASS_ALIAS,
        serialization_alias="class",
    )
    level: int = Field(default=1, ge=1, le=20)
    ability_scores: AbilityScores
    hp: HitPoints
    spell_slots: list[SpellSlot] = Field(default_factory=list)
    equipment: list[EquipmentItem] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=default_skills)
    armor_class: ArmorClass = Field(default_factory=ArmorClass)
    saving_throw_proficiencies: list[AbilityKey] = Field(default_factory=list)
    notes: str = ""

    @field_validator("saving_throw_proficiencies")
    @classmethod
    def _unique_saving_throws(cls, value: list[AbilityKey]) -> list[AbilityKey]:
        return _reject_duplicate_keys(value)


class CharacterRead(CharacterCreate):
    id: str = Field(..., description="Primary key")
    slug: str | None = Field(None, description="Share identifier")
    created_at: datetime
    updated_at: datetime


class CharacterUpdate(SchemaModel):
    """Partial update.

    Fields that are present replace the stored value whole; absent fields are
    preserved.  Nested objects are never merged key by key.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    race: str | None = Field(None, min_length=1, max_length=100)
    character_class: str | None = Field(
        None,
        min_length=1,
        max_length=100,
        validation_alias=CLASS_ALIAS,
        serialization_alias="class",
    )
    level: int | None = Field(None, ge=1, le=20)
    ability_scores: AbilityScores | None = None
    hp: HitPoints | None = None
    spell_slots: list[SpellSlot] | None = None
    equipment: list[EquipmentItem] | None = None
    skills: list[Skill] | None = None
    armor_class: ArmorClass | None = None
    saving_throw_proficiencies: list[AbilityKey] | None = None
    notes: str | None = None

    @field_validator("saving_throw_proficiencies")
    @classmethod
    def _unique_saving_throws(cls, value: list[AbilityKey] | None) -> list[AbilityKey] | None:
        if value is None:
            return value
        return _reject_duplicate_keys(value)

    @model_validator(mode="after")
    def _no_explicit_nulls(self) -> CharacterUpdate:
        nulled = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulled:
            raise ValueError(f"fields cannot be set to null: {', '.join(nulled)}")
        return self

    def changes(self) -> dict[str, object]:
        """Return only the explicitly provided fields, keyed by attribute name."""

        return self.model_dump(exclude_unset=True)


class CharacterStatsRead(SchemaModel):
    armor_class: float
    proficiency_bonus: int
    ability_modifiers: dict[AbilityKey, int]
    saving_throws: dict[AbilityKey, int]
    skills: dict[str, int]
    total_weight: float

"""Character Service.

This module composes validation, the character repository and the domain
rules into named operations.  Every mutating operation follows the same
sequence: validate the input, load the current record, compute the new
sub-state with a rule function, write back only the changed fields and return
the merged character.  A missing character yields ``None``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel, TypeAdapter

from charsheet.domain import models as dm
from charsheet.domain import rules
from charsheet.domain.enums import AbilityKey
from charsheet.interfaces import ICharacterRepository
from charsheet.schemas import (
    CharacterCreate,
    CharacterUpdate,
    EquipmentItem,
    EquipmentItemCreate,
    FiniteFloat,
)

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

_ABILITY_KEY: TypeAdapter[AbilityKey] = TypeAdapter(AbilityKey)
_AC_OVERRIDE: TypeAdapter[FiniteFloat | None] = TypeAdapter(FiniteFloat | None)


def _validate(schema: type[SchemaT], data: SchemaT | Mapping[str, Any]) -> SchemaT:
    if isinstance(data, schema):
        return data
    return schema.model_validate(data)


class CharacterService:
    """Service for reading and mutating character sheets."""

    def __init__(self, repository: ICharacterRepository) -> None:
        self.repository = repository

    # --- Queries -------------------------------------------------------------

    def list_characters(self) -> list[dm.Character]:
        characters = self.repository.find_all()
        logger.info("listed %d characters", len(characters))
        return characters

    def get_character(self, character_id: str) -> dm.Character | None:
        character = self.repository.find_by_id(character_id)
        if character is None:
            logger.info("character %s not found", character_id)
        return character

    def get_character_by_slug(self, slug: str) -> dm.Character | None:
        character = self.repository.find_by_slug(slug)
        if character is None:
            logger.info("no character with slug %s", slug)
        return character

    def character_stats(self, character_id: str) -> dm.CharacterStats | None:
        """Return the derived sheet values (AC, bonuses, carried weight)."""

        character = self._load(character_id, "stats")
        if character is None:
            return None
        return rules.character_stats(character)

    # --- Lifecycle -----------------------------------------------------------

    def create_character(self, data: CharacterCreate | Mapping[str, Any]) -> dm.Character:
        """Validate and persist a new character.

        Raises:
            pydantic.ValidationError: The input violates the schema.
            SlugCollisionError: No free slug could be generated.
        """

        payload = _validate(CharacterCreate, data)
        character = self.repository.create(payload)
        logger.info("created character %s (%s) slug=%s", character.id, character.name, character.slug)
        return character

    def update_character(
        self, character_id: str, data: CharacterUpdate | Mapping[str, Any]
    ) -> dm.Character | None:
        """Apply a validated partial update.

        Raises:
            pydantic.ValidationError: The patch violates the schema.
        """

        patch = _validate(CharacterUpdate, data)
        character = self.repository.update(character_id, patch)
        if character is None:
            logger.info("character %s not found for update", character_id)
        else:
            logger.info("updated character %s fields=%s", character_id, sorted(patch.changes()))
        return character

    def delete_character(self, character_id: str) -> bool:
        deleted = self.repository.delete(character_id)
        logger.info("delete character %s -> %s", character_id, deleted)
        return deleted

    # --- Hit points ----------------------------------------------------------

    def deal_damage(self, character_id: str, amount: int) -> dm.Character | None:
        character = self._load(character_id, "damage")
        if character is None:
            return None
        hp = rules.apply_damage(character.hp, amount)
        logger.info("character %s took %d damage -> %s", character_id, amount, hp)
        return self._write(character_id, hp=hp)

    def heal_character(self, character_id: str, amount: int) -> dm.Character | None:
        character = self._load(character_id, "healing")
        if character is None:
            return None
        hp = rules.apply_healing(character.hp, amount)
        logger.info("character %s healed %d -> %s", character_id, amount, hp)
        return self._write(character_id, hp=hp)

    # --- Proficiencies -------------------------------------------------------

    def toggle_skill_proficiency(self, character_id: str, skill_name: str) -> dm.Character | None:
        character = self._load(character_id, "skill toggle")
        if character is None:
            return None
        skills = rules.toggle_skill(character.skills, skill_name)
        logger.info("character %s toggled skill %s", character_id, skill_name)
        return self._write(character_id, skills=skills)

    def toggle_saving_throw_proficiency(
        self, character_id: str, ability_key: AbilityKey | str
    ) -> dm.Character | None:
        """Add or remove a saving throw proficiency.

        Raises:
            pydantic.ValidationError: ``ability_key`` is not one of the six abilities.
        """

        key = _ABILITY_KEY.validate_python(ability_key)
        character = self._load(character_id, "saving throw toggle")
        if character is None:
            return None
        proficiencies = rules.toggle_saving_throw(character.saving_throw_proficiencies, key)
        logger.info("character %s toggled saving throw %s", character_id, key)
        return self._write(character_id, saving_throw_proficiencies=proficiencies)

    # --- Equipment -----------------------------------------------------------

    def add_equipment(
        self, character_id: str, item: EquipmentItemCreate | Mapping[str, Any]
    ) -> dm.Character | None:
        """Append an item; its identifier is generated here.

        Raises:
            pydantic.ValidationError: The item violates the schema.
        """

        payload = _validate(EquipmentItemCreate, item)
        character = self._load(character_id, "adding equipment")
        if character is None:
            return None
        new_item = EquipmentItem(id=str(uuid4()), **payload.model_dump())
        logger.info("character %s gained %s (%s)", character_id, new_item.name, new_item.id)
        return self._write(character_id, equipment=[*character.equipment, new_item])

    def remove_equipment(self, character_id: str, item_id: str) -> dm.Character | None:
        character = self._load(character_id, "removing equipment")
        if character is None:
            return None
        equipment = [item for item in character.equipment if item.id != item_id]
        logger.info("character %s dropped item %s", character_id, item_id)
        return self._write(character_id, equipment=equipment)

    # --- Spell slots ---------------------------------------------------------

    def use_spell_slot(self, character_id: str, level: int) -> dm.Character | None:
        """Spend one slot at ``level``.

        Raises:
            SpellSlotExhaustedError: Nothing is left to spend at that level.
        """

        character = self._load(character_id, "spell slot use")
        if character is None:
            return None
        spell_slots = rules.use_spell_slot(character.spell_slots, level)
        logger.info("character %s used a level %d slot", character_id, level)
        return self._write(character_id, spell_slots=spell_slots)

    def restore_spell_slot(self, character_id: str, level: int) -> dm.Character | None:
        character = self._load(character_id, "spell slot restore")
        if character is None:
            return None
        spell_slots = rules.restore_spell_slot(character.spell_slots, level)
        logger.info("character %s restored a level %d slot", character_id, level)
        return self._write(character_id, spell_slots=spell_slots)

    def long_rest(self, character_id: str) -> dm.Character | None:
        character = self._load(character_id, "long rest")
        if character is None:
            return None
        spell_slots = rules.long_rest(character.spell_slots)
        logger.info("character %s completed a long rest", character_id)
        return self._write(character_id, spell_slots=spell_slots)

    # --- Armor class ---------------------------------------------------------

    def set_ac_override(self, character_id: str, override: float | None) -> dm.Character | None:
        """Set or clear (``None``) the manual armor class."""

        value = _AC_OVERRIDE.validate_python(override)
        character = self._load(character_id, "AC override")
        if character is None:
            return None
        armor_class = replace(character.armor_class, override=value)
        logger.info("character %s AC override -> %s", character_id, value)
        return self._write(character_id, armor_class=armor_class)

    # --- Helpers -------------------------------------------------------------

    def _load(self, character_id: str, action: str) -> dm.Character | None:
        character = self.repository.find_by_id(character_id)
        if character is None:
            logger.info("character %s not found for %s", character_id, action)
        return character

    def _write(self, character_id: str, **changes: Any) -> dm.Character | None:
        patch = CharacterUpdate.model_validate(changes, from_attributes=True)
        return self.repository.update(character_id, patch)

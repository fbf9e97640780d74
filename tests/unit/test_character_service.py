"""Tests for CharacterService orchestration."""

from __future__ import annotations

from dataclasses import replace
from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from charsheet.domain.enums import AbilityKey
from charsheet.domain.models import SpellSlot
from charsheet.errors import SpellSlotExhaustedError
from charsheet.services import CharacterService

MISSING_ID = "00000000-0000-4000-8000-000000000000"


@pytest.fixture
def service(character_repository) -> CharacterService:
    return CharacterService(character_repository)


@pytest.fixture
def character(service, character_payload):
    return service.create_character(character_payload)


def test_create_validates_before_writing(character_payload):
    repository = Mock()
    service = CharacterService(repository)

    with pytest.raises(ValidationError):
        service.create_character(dict(character_payload, level=0))

    repository.create.assert_not_called()


def test_get_and_list(service, character):
    assert service.get_character(character.id) == character
    assert service.get_character_by_slug(character.slug) == character
    assert service.list_characters() == [character]
    assert service.get_character(MISSING_ID) is None


def test_update_character(service, character):
    updated = service.update_character(character.id, {"notes": "Fly, you fools!"})

    assert updated.notes == "Fly, you fools!"
    assert updated.name == character.name


def test_update_invalid_patch_raises(service, character):
    with pytest.raises(ValidationError):
        service.update_character(character.id, {"level": 99})
    assert service.get_character(character.id).level == character.level


def test_damage_and_heal(service, character):
    damaged = service.deal_damage(character.id, 10)
    assert damaged.hp.current == 22

    healed = service.heal_character(character.id, 100)
    assert healed.hp.current == 32
    assert healed.hp.temp == 0


def test_operations_on_missing_character_return_none(service):
    assert service.deal_damage(MISSING_ID, 5) is None
    assert service.heal_character(MISSING_ID, 5) is None
    assert service.long_rest(MISSING_ID) is None
    assert service.use_spell_slot(MISSING_ID, 1) is None
    assert service.add_equipment(MISSING_ID, {"name": "Rope"}) is None
    assert service.character_stats(MISSING_ID) is None
    assert service.delete_character(MISSING_ID) is False


def test_missing_character_is_never_written():
    repository = Mock()
    repository.find_by_id.return_value = None
    service = CharacterService(repository)

    assert service.deal_damage(MISSING_ID, 5) is None

    repository.update.assert_not_called()


def test_toggle_skill_proficiency(service, character):
    toggled = service.toggle_skill_proficiency(character.id, "Arcana")

    arcana = next(skill for skill in toggled.skills if skill.name == "Arcana")
    assert arcana.proficient is True


def test_toggle_saving_throw_proficiency(service, character):
    removed = service.toggle_saving_throw_proficiency(character.id, "INT")
    assert removed.saving_throw_proficiencies == [AbilityKey.WIS]

    added = service.toggle_saving_throw_proficiency(character.id, AbilityKey.STR)
    assert added.saving_throw_proficiencies == [AbilityKey.WIS, AbilityKey.STR]


def test_toggle_saving_throw_rejects_unknown_key(service, character):
    with pytest.raises(ValidationError):
        service.toggle_saving_throw_proficiency(character.id, "LUCK")


def test_add_and_remove_equipment(service, character):
    added = service.add_equipment(character.id, {"name": "Pipe", "weight": 0.5})

    new_item = added.equipment[-1]
    assert new_item.name == "Pipe"
    assert new_item.quantity == 1
    assert new_item.id not in {item.id for item in character.equipment}

    removed = service.remove_equipment(character.id, new_item.id)
    assert [item.id for item in removed.equipment] == [item.id for item in character.equipment]


def test_add_equipment_validates_item(service, character):
    with pytest.raises(ValidationError):
        service.add_equipment(character.id, {"name": "Coins", "quantity": 0})


def test_spell_slot_cycle(service, character):
    used = service.use_spell_slot(character.id, 2)
    assert used.spell_slots[1].used == 1

    restored = service.restore_spell_slot(character.id, 2)
    assert restored.spell_slots[1].used == 0

    for _ in range(4):
        service.use_spell_slot(character.id, 1)
    with pytest.raises(SpellSlotExhaustedError) as excinfo:
        service.use_spell_slot(character.id, 1)
    assert excinfo.value.level == 1

    rested = service.long_rest(character.id)
    assert [slot.used for slot in rested.spell_slots] == [0, 0]


def test_set_and_clear_ac_override(service, character):
    overridden = service.set_ac_override(character.id, 18)
    assert overridden.armor_class.override == 18
    assert service.character_stats(character.id).armor_class == 18

    cleared = service.set_ac_override(character.id, None)
    assert cleared.armor_class.override is None
    assert service.character_stats(character.id).armor_class == 12


def test_character_stats(service, character):
    stats = service.character_stats(character.id)

    assert stats.proficiency_bonus == 3
    assert stats.saving_throws[AbilityKey.INT] == 7
    assert stats.skills["Arcana"] == 4
    assert stats.total_weight == 14.0


def test_each_mutation_advances_updated_at(service, character):
    updated = service.deal_damage(character.id, 1)

    assert updated.updated_at >= character.updated_at
    assert updated.created_at == character.created_at


def test_exhausted_slot_is_never_written(character):
    repository = Mock()
    repository.find_by_id.return_value = replace(
        character, spell_slots=[SpellSlot(level=1, available=1, used=1)]
    )
    service = CharacterService(repository)

    with pytest.raises(SpellSlotExhaustedError):
        service.use_spell_slot(character.id, 1)
    with pytest.raises(SpellSlotExhaustedError):
        service.use_spell_slot(character.id, 3)

    repository.update.assert_not_called()


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_ac_override_rejected(service, character, value):
    with pytest.raises(ValidationError):
        service.set_ac_override(character.id, value)

    assert service.get_character(character.id).armor_class.override is None


@pytest.mark.parametrize("value", [float("inf"), float("nan")])
def test_non_finite_weight_leaves_store_readable(service, character, value):
    with pytest.raises(ValidationError):
        service.add_equipment(character.id, {"name": "Anvil", "weight": value})
    with pytest.raises(ValidationError):
        service.update_character(character.id, {"armor_class": {"base": value}})

    assert service.list_characters() == [character]
    assert service.character_stats(character.id).total_weight == 14.0

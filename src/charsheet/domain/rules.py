"""Pure D&D 5e rules applied to character state.

Every function returns new values and leaves its arguments untouched.  Hit
point and healing overflow are bounded silently; spending a spell slot that
does not exist is the only rule that raises.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import replace

from charsheet.errors import SpellSlotExhaustedError

from .enums import AbilityKey
from .models import (
    AbilityScores,
    ArmorClass,
    Character,
    CharacterStats,
    EquipmentItem,
    HitPoints,
    Skill,
    SpellSlot,
)


def ability_modifier(score: int) -> int:
    """Return the modifier for an ability score: ``floor((score - 10) / 2)``."""

    return math.floor((score - 10) / 2)


def proficiency_bonus(level: int) -> int:
    """Return the proficiency bonus for a character level (2 at 1st, 6 at 17th)."""

    return math.ceil(level / 4) + 1


def skill_bonus(ability_score: int, proficient: bool, level: int) -> int:
    """Return the bonus for a skill check rolled with ``ability_score``."""

    modifier = ability_modifier(ability_score)
    if proficient:
        return modifier + proficiency_bonus(level)
    return modifier


def saving_throw_bonus(ability_score: int, proficient: bool, level: int) -> int:
    """Saving throws follow the same formula as skill checks."""

    return skill_bonus(ability_score, proficient, level)


def apply_damage(hp: HitPoints, amount: int) -> HitPoints:
    """Apply damage, spending temporary hit points first.

    Non-positive amounts are ignored. Current hit points never drop below
    zero and the maximum is left unchanged.
    """

    if amount <= 0:
        return replace(hp)

    absorbed = min(hp.temp, amount)
    remaining = amount - absorbed
    return HitPoints(
        current=max(0, hp.current - remaining),
        max=hp.max,
        temp=max(0, hp.temp - absorbed),
    )


def apply_healing(hp: HitPoints, amount: int) -> HitPoints:
    """Restore hit points up to the maximum; temporary hit points are untouched."""

    if amount <= 0:
        return replace(hp)
    return HitPoints(current=min(hp.max, hp.current + amount), max=hp.max, temp=hp.temp)


def calculate_ac(dex_score: int, armor_class: ArmorClass) -> float:
    """Return the effective armor class; a manual override always wins."""

    if armor_class.override is not None:
        return armor_class.override
    return armor_class.base + ability_modifier(dex_score)


def calculate_total_weight(equipment: Iterable[EquipmentItem]) -> float:
    return sum((item.weight * item.quantity for item in equipment), 0)


def use_spell_slot(slots: Sequence[SpellSlot], level: int) -> list[SpellSlot]:
    """Spend one slot at ``level``.

    Raises:
        SpellSlotExhaustedError: No slot exists at the level or all are used.
    """

    slot = next((s for s in slots if s.level == level), None)
    if slot is None or slot.used >= slot.available:
        raise SpellSlotExhaustedError(level)
    return [replace(s, used=s.used + 1) if s.level == level else replace(s) for s in slots]


def restore_spell_slot(slots: Sequence[SpellSlot], level: int) -> list[SpellSlot]:
    """Give back one slot at ``level``; unknown levels leave the slots as they are."""

    return [replace(s, used=max(0, s.used - 1)) if s.level == level else replace(s) for s in slots]


def long_rest(slots: Sequence[SpellSlot]) -> list[SpellSlot]:
    return [replace(s, used=0) for s in slots]


def toggle_skill(skills: Sequence[Skill], name: str) -> list[Skill]:
    """Flip proficiency for the skill called ``name``."""

    return [
        replace(s, proficient=not s.proficient) if s.name == name else replace(s) for s in skills
    ]


def toggle_saving_throw(
    proficiencies: Sequence[AbilityKey], key: AbilityKey
) -> list[AbilityKey]:
    """Add ``key`` to the proficiency set, or remove it when already present."""

    key = AbilityKey(key)
    if key in proficiencies:
        return [k for k in proficiencies if k != key]
    return [*proficiencies, key]


def ability_modifiers(scores: AbilityScores) -> dict[AbilityKey, int]:
    return {key: ability_modifier(scores.score(key)) for key in AbilityKey}


def character_stats(character: Character) -> CharacterStats:
    """Compute the derived values shown on a character sheet."""

    scores = character.ability_scores
    level = character.level
    saving = set(character.saving_throw_proficiencies)
    return CharacterStats(
        armor_class=calculate_ac(scores.DEX, character.armor_class),
        proficiency_bonus=proficiency_bonus(level),
        ability_modifiers=ability_modifiers(scores),
        saving_throws={
            key: saving_throw_bonus(scores.score(key), key in saving, level) for key in AbilityKey
        },
        skills={
            skill.name: skill_bonus(scores.score(skill.ability_key), skill.proficient, level)
            for skill in character.skills
        },
        total_weight=calculate_total_weight(character.equipment),
    )

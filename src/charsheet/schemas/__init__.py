from .character import (
    AbilityScores,
    ArmorClass,
    CharacterCreate,
    CharacterRead,
    CharacterStatsRead,
    CharacterUpdate,
    EquipmentItem,
    EquipmentItemCreate,
    FiniteFloat,
    HitPoints,
    Skill,
    SpellSlot,
    default_skills,
)
from .spell import SpellFilters, SrdSpell

__all__ = [
    "AbilityScores",
    "ArmorClass",
    "CharacterCreate",
    "CharacterRead",
    "CharacterStatsRead",
    "CharacterUpdate",
    "EquipmentItem",
    "EquipmentItemCreate",
    "FiniteFloat",
    "HitPoints",
    "Skill",
    "SpellFilters",
    "SpellSlot",
    "SrdSpell",
    "default_skills",
]

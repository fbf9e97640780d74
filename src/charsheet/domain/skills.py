"""Catalog of the 18 SRD skills and their governing abilities."""

from __future__ import annotations

from .enums import AbilityKey

SKILLS: tuple[tuple[str, AbilityKey], ...] = (
    ("Acrobatics", AbilityKey.DEX),
    ("Animal Handling", AbilityKey.WIS),
    ("Arcana", AbilityKey.INT),
    ("Athletics", AbilityKey.STR),
    ("Deception", AbilityKey.CHA),
    ("History", AbilityKey.INT),
    ("Insight", AbilityKey.WIS),
    ("Intimidation", AbilityKey.CHA),
    ("Investigation", AbilityKey.INT),
    ("Medicine", AbilityKey.WIS),
    ("Nature", AbilityKey.INT),
    ("Perception", AbilityKey.WIS),
    ("Performance", AbilityKey.CHA),
    ("Persuasion", AbilityKey.CHA),
    ("Religion", AbilityKey.INT),
    ("Sleight of Hand", AbilityKey.DEX),
    ("Stealth", AbilityKey.DEX),
    ("Survival", AbilityKey.WIS),
)

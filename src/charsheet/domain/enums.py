"""Enumerations used across the character domain."""

from __future__ import annotations

from enum import StrEnum


class AbilityKey(StrEnum):
    """The six ability scores, keyed by their standard abbreviations."""

    STR = "STR"
    DEX = "DEX"
    CON = "CON"
    INT = "INT"
    WIS = "WIS"
    CHA = "CHA"


class StorageBackend(StrEnum):
    """Persistence adapters available for character records."""

    SQL = "sql"
    JSON = "json"

"""Persistence adapters for characters and the SRD spell cache."""

from charsheet.repository.json_store import JsonCharacterRepository
from charsheet.repository.spell_store import SqlSpellRepository
from charsheet.repository.sql_store import SqlCharacterRepository

__all__ = [
    "JsonCharacterRepository",
    "SqlCharacterRepository",
    "SqlSpellRepository",
]

"""SQLAlchemy models for the character sheet manager.

This module exports the declarative base and every table model.
"""

from .base import Base, TimestampMixin, as_utc, utc_now
from .character import CharacterRecord
from .spell import SrdSpellRecord

__all__ = [
    "Base",
    "CharacterRecord",
    "SrdSpellRecord",
    "TimestampMixin",
    "as_utc",
    "utc_now",
]

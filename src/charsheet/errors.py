"""Exception hierarchy for the character sheet manager.

Validation failures surface as :class:`pydantic.ValidationError` and a missing
character is reported as ``None``, so the classes below only cover the
conditions that are neither of those: illegal game actions, exhausted slug
retries and a failing SRD upstream.
"""

from __future__ import annotations

from typing import Any


class CharsheetError(Exception):
    """Base exception for all character sheet errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context for logging and API responses.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


class DomainRuleViolation(CharsheetError, ValueError):
    """Raised when an operation would perform an illegal game action."""


class SpellSlotExhaustedError(DomainRuleViolation):
    """Raised when a spell slot is used at a level with nothing left to spend."""

    def __init__(self, level: int) -> None:
        self.level = level
        super().__init__(
            f"No available spell slots at level {level}",
            details={"level": level},
        )


class SlugCollisionError(CharsheetError):
    """Raised when no free slug could be generated within the retry budget."""

    def __init__(self, name: str, attempts: int) -> None:
        self.name = name
        self.attempts = attempts
        super().__init__(
            f"Could not generate a unique slug for {name!r} after {attempts} attempt(s)",
            details={"name": name, "attempts": attempts},
        )


class SrdFetchError(CharsheetError):
    """Raised when the SRD spell list cannot be retrieved."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(
            f"SRD API list request failed: {status_code}",
            details={"status_code": status_code, "url": url},
        )

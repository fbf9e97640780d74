"""Human-readable share identifiers for characters."""

from __future__ import annotations

import re
import secrets

FALLBACK_BASE = "character"
SUFFIX_BYTES = 2

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(name: str) -> str:
    """Reduce ``name`` to lower-case alphanumerics separated by single hyphens."""

    base = _DISALLOWED.sub("", name.lower().strip())
    base = _WHITESPACE.sub("-", base)
    base = _HYPHENS.sub("-", base)
    return base.strip("-")


def generate_slug(name: str) -> str:
    """Return ``slugify(name)`` followed by a random four character hex suffix.

    Example:
        ```python
        generate_slug("Gandalf the Grey")  # "gandalf-the-grey-3fa9"
        ```
    """

    base = slugify(name) or FALLBACK_BASE
    return f"{base}-{secrets.token_hex(SUFFIX_BYTES)}"

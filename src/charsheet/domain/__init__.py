"""Domain layer for the character sheet manager.

This package is free of I/O.  It exposes:

* Dataclasses describing a character sheet (see :mod:`models`).
* Enumerations and strongly-typed identifiers (see :mod:`enums`).
* Pure rule functions (see :mod:`rules`).
* Slug generation and the SRD skill catalog (see :mod:`slug`, :mod:`skills`).
"""

from . import enums, models, rules, skills, slug

__all__ = [
    "enums",
    "models",
    "rules",
    "skills",
    "slug",
]

"""Personal D&D 5e character sheet manager.

The package is organised in layers:

* :mod:`charsheet.domain` - dataclasses and pure rule functions.
* :mod:`charsheet.schemas` - pydantic validation schemas.
* :mod:`charsheet.repository` - persistence adapters behind a shared contract.
* :mod:`charsheet.services` - orchestration of validation, rules and storage.
* :mod:`charsheet.api` - FastAPI application exposing the services.
"""

__version__ = "0.1.0"

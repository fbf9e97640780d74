"""Development entrypoint for the character sheet HTTP API."""

from __future__ import annotations

from charsheet.main import main

if __name__ == "__main__":
    main()

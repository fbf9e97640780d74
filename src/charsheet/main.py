"""Command line entrypoint serving the character sheet API with uvicorn."""

from __future__ import annotations

import argparse

import uvicorn

from charsheet.config import get_settings
from charsheet.logging_setup import configure_logging


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the character sheet API server")
    parser.add_argument("--host", default="127.0.0.1", help="Host interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="TCP port to listen on")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable autoreload (dev mode)",
    )
    parser.add_argument("--log-level", default=None, help="Override CHARSHEET_LOG_LEVEL")
    args = parser.parse_args(argv)

    level = args.log_level or get_settings().log_level
    configure_logging(level)

    uvicorn.run(
        "charsheet.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=level.lower(),
    )


if __name__ == "__main__":  # pragma: no cover - manual launch helper
    main()

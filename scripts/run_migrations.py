#!/usr/bin/env python3
"""Bring the database schema up to date before the API starts.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade to a specific revision
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from presence.config import Settings
from presence.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(argv: list[str]) -> int:
    """Migrate to the requested revision (default: head)."""
    target = argv[1] if len(argv) > 1 else "head"
    configure_logfire(Settings())

    config = Config(str(ALEMBIC_INI))
    with logfire.span("run_migrations", target=target):
        try:
            command.upgrade(config, target)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                target=target,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Never start the app against a half-migrated schema
            raise

    logfire.info("Database migrations completed", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))

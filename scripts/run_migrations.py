#!/usr/bin/env python3
"""Apply database migrations, logging failures to Logfire.

Usage:
    python scripts/run_migrations.py [revision]

The revision defaults to "head".
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from comments.config import Settings
from comments.util.observability import check_production_settings, configure_logfire


def main(argv: list[str]) -> int:
    """Upgrade the schema to the requested revision."""
    settings = Settings()
    configure_logfire(settings)
    check_production_settings(settings)

    revision = argv[1] if len(argv) > 1 else "head"
    try:
        logfire.info("Starting database migrations", revision=revision)
        command.upgrade(Config("alembic.ini"), revision)
        logfire.info("Database migrations completed", revision=revision)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Fail loudly so the service does not start on a stale schema
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv))

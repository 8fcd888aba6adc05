#!/usr/bin/env python3
"""Upgrade the database schema to the latest revision."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from dealspark.config import Settings
from dealspark.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Apply migrations up to ``revision``; failures are logged and re-raised."""
    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)

    with logfire.span("migrations.upgrade", revision=revision):
        try:
            command.upgrade(alembic_cfg, revision)
        except Exception as e:
            logfire.error(
                "Schema migration failed",
                revision=revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy instead of serving a stale schema
            raise

    logfire.info("Schema is up to date", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))

#!/usr/bin/env python3
"""Upgrade the database to the latest schema revision.

Run before the API starts. A failure exits non-zero so the deployment stops
instead of serving against a half-migrated schema.
"""

import sys

import logfire
from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory

from qna.config import Settings
from qna.util.observability import configure_logfire


def main(config_path: str = "alembic.ini") -> int:
    """Run pending migrations, reporting progress to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config(config_path)
    heads = ScriptDirectory.from_config(alembic_cfg).get_heads()

    with logfire.span("run_migrations", target=heads, environment=settings.environment):
        try:
            command.upgrade(alembic_cfg, "head")
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            raise

    logfire.info("Database is at head revision", heads=heads)
    return 0


if __name__ == "__main__":
    sys.exit(main())

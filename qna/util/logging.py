"""Standard library logging for servers and drivers.

Application events go through logfire. Uvicorn, SQLAlchemy, asyncpg and
alembic log through ``logging`` and are configured here.
"""

import logging
import sys

from qna.config import Settings

# Loggers that are only useful while debugging
_CHATTY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncpg")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger and third-party log levels.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    chatty_level = logging.DEBUG if settings.debug else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)

    # Request lines are already traced by logfire outside development
    if settings.environment in ("staging", "production"):
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )

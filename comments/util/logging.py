"""Standard library logging setup.

The application itself logs through logfire. This module covers the
libraries that use ``logging`` (uvicorn, alembic, SQLAlchemy, asyncpg) and
forwards their records to logfire so one pipeline sees everything.
"""

import logging

import logfire

from comments.config import Settings

# Library loggers and the level they run at outside debug mode
QUIET_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "asyncpg": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "uvicorn.access": logging.INFO,
    "alembic": logging.INFO,
}


def setup_logging(settings: Settings) -> None:
    """Route stdlib logging into logfire.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO
    if settings.environment == "test":
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,
    )

    for name, library_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level if settings.debug else library_level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )

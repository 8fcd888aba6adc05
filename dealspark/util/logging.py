"""Stdlib logging configuration.

Library and uvicorn records are forwarded to Logfire next to the
application's own spans; configure Logfire first.
"""

import logging
import sys

import logfire

from dealspark.config import Settings


def log_level(settings: Settings) -> int:
    """Root level for an environment: DEBUG when debugging, quieter in production."""
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Args:
        settings: Application settings
    """
    level = log_level(settings)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logfire.LogfireLoggingHandler(),
        ],
        force=True,  # Override any existing configuration
    )

    # SQL echo is controlled by the debug flag on the engine
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger("dealspark").setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )

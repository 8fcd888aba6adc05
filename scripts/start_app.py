#!/usr/bin/env python3
"""Serve the DealSpark API with uvicorn.

Logfire is configured before the app module is imported so startup
failures (bad settings, unreachable database) are reported too.
"""

import sys

import logfire
import uvicorn

from dealspark.config import Settings
from dealspark.util.logging import setup_logging
from dealspark.util.observability import configure_logfire


def main() -> int:
    """Start the API and report startup errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting DealSpark API",
            host=settings.server.host,
            port=settings.server.port,
            environment=settings.environment,
        )

        # The app module configures nothing itself; it builds the app on import
        uvicorn.run(
            "dealspark.interface.api.app:app",
            host=settings.server.host,
            port=settings.server.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=True,
        )
        return 0

    except Exception as e:
        logfire.error(
            "DealSpark API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""Expire published deals whose expiry time has passed.

Meant to run on a schedule (cron or a platform job) next to the API.
"""

import asyncio
import sys

import logfire

from dealspark.config import Settings
from dealspark.domain.service import ModerationService
from dealspark.util.di.container import create_container
from dealspark.util.logging import setup_logging
from dealspark.util.observability import configure_logfire


async def sweep() -> int:
    """Run one expiry sweep as the system actor."""
    container = create_container()
    try:
        async with container() as request_container:
            moderation_service = await request_container.get(ModerationService)
            expired = await moderation_service.expire_due()
            return len(expired)
    finally:
        await container.close()


def main() -> int:
    """Run the sweep and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    try:
        count = asyncio.run(sweep())
        logfire.info("Expiry sweep finished", expired=count)
        return 0

    except Exception as e:
        logfire.error(
            "Expiry sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

"""FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dealspark.config import Settings
from dealspark.interface.api.routes import deals, health, moderation, votes
from dealspark.util.di.container import create_container, setup_di
from dealspark.util.error import ConfigurationError
from dealspark.util.observability import instrument_fastapi

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "CHANGE_ME_IN_PRODUCTION"


def check_settings(settings: Settings) -> None:
    """Refuse to serve production traffic with development defaults.

    Raises:
        ConfigurationError: If production runs with the default JWT secret
    """
    if settings.auth.jwt_secret != DEFAULT_JWT_SECRET:
        return
    if settings.environment == "production":
        raise ConfigurationError("AUTH__JWT_SECRET must be set in production")
    logger.warning("Using the development JWT secret")


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()
    check_settings(settings)

    app_instance = FastAPI(
        title="DealSpark API",
        description="Deal ranking and moderation engine for a community deals site",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "X-Viewer-Fingerprint",
        ],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(deals.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(moderation.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
# In tests: configure in conftest.py
app = create_app()

"""FastAPI application."""

from fastapi import FastAPI

from comments.config import Settings
from comments.interface.api.routes import (
    comments,
    flags,
    health,
    moderation,
    subscriptions,
    votes,
)
from comments.util.di.container import create_container, setup_di
from comments.util.logging import setup_logging
from comments.util.observability import check_production_settings, instrument_fastapi


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Raises:
        ConfigurationError: If production is started with development defaults
    """
    settings = Settings()
    setup_logging(settings)
    check_production_settings(settings)

    app_instance = FastAPI(
        title="Comments API",
        description="Threaded comments with moderation, flagging, voting and "
        "subscriptions for any content item of a host platform",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance, settings)

    # Setup dependency injection
    # Share the settings validated above with the container
    container = create_container(settings)
    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(flags.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(subscriptions.router)
    app_instance.include_router(moderation.router)

    return app_instance

"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka

from comments.config import Settings
from comments.util.di import build_providers


def create_container(settings: Settings | None = None) -> AsyncContainer:
    """Build the production container.

    Args:
        settings: Settings already loaded by the caller. When omitted they
            are loaded from environment variables.

    Returns:
        Container with every component on its production implementation
    """
    return make_async_container(
        *build_providers(settings=settings), FastapiProvider()
    )


def setup_di(app, container: AsyncContainer) -> None:
    """Attach the container to a FastAPI application.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)

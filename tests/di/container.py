"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container

from comments.config import Settings
from comments.util.di import COMPONENTS, Component, build_providers


def build_test_container(
    unmock: set[Component] | None = None, settings: Settings | None = None
) -> AsyncContainer:
    """Build test container with selective unmocking.

    Assumes docker-compose services are running for any unmocked component.

    Args:
        unmock: Components to use production implementations for.
                All others use their in-memory implementation.
        settings: Settings to use instead of the environment

    Returns:
        Configured test container

    Raises:
        ValueError: If an unknown component is requested

    Examples:
        # Unit tests - all mocks
        container = build_test_container()

        # Flag threshold of 2
        container = build_test_container(
            settings=Settings(comments=CommentSettings(flagged_comment_limit=2))
        )

        # Integration tests - real persistence
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    unknown = unmock - set(COMPONENTS)
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    mocked = set(COMPONENTS) - unmock
    return make_async_container(*build_providers(mocked, settings))

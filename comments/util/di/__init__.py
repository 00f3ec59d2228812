"""Dependency injection module.

The container is assembled from core providers, which are always real, and
one provider per swappable component. Each component has a production
implementation here and an in-memory one registered by the test suite.
"""

from typing import Iterable, Type

from dishka import Provider

from comments.config import Settings
from comments.util.di.adapter import ProdAdapterProvider
from comments.util.di.application import ProdApplicationProvider
from comments.util.di.base import Component, ProviderBase
from comments.util.di.core import ProdConfigProvider, StaticConfigProvider
from comments.util.di.domain import ProdDomainProvider
from comments.util.di.infrastructure import (
    NotificationProvider,
    PersistenceProvider,
    ProdNotificationProvider,
    ProdPersistenceProvider,
)

CORE_PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdAdapterProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
]

COMPONENTS: dict[Component, Type[ProviderBase]] = {
    "notification": NotificationProvider,
    "persistence": PersistenceProvider,
}


def get_provider(component: Component, use_mock: bool = False) -> Type[ProviderBase]:
    """Find the implementation of a swappable component.

    Args:
        component: Component name
        use_mock: Whether to pick the in-memory implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If no implementation of that kind is registered
    """
    for impl in COMPONENTS[component].__subclasses__():
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {component}")


def build_providers(
    mocked: Iterable[Component] = (), settings: Settings | None = None
) -> list[Provider]:
    """Instantiate every provider the container needs.

    Args:
        mocked: Components to replace with their in-memory implementation
        settings: Already loaded settings; they override the environment

    Returns:
        Provider instances, settings override last
    """
    mocked = set(mocked)
    providers: list[Provider] = [base() for base in CORE_PROVIDERS]
    providers.extend(
        get_provider(component, use_mock=component in mocked)()
        for component in COMPONENTS
    )
    if settings is not None:
        providers.append(StaticConfigProvider(settings))
    return providers


__all__ = [
    "COMPONENTS",
    "CORE_PROVIDERS",
    "Component",
    "ProviderBase",
    "build_providers",
    "get_provider",
    "NotificationProvider",
    "PersistenceProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]

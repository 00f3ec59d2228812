"""Swappable infrastructure components.

Production implementations are imported here so that they register as
subclasses of their component base before the container is built.
"""

from .notification import NotificationProvider, ProdNotificationProvider
from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = [
    "NotificationProvider",
    "PersistenceProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]

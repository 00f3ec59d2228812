"""Client session adapters."""

from .store import DictSessionStore

__all__ = ["DictSessionStore"]

"""Session store backed by a plain dict."""

from typing import Optional

from comments.domain.service.session import SessionStore


class DictSessionStore(SessionStore):
    """Holds session values for one request.

    The interface layer seeds it from the client's cookies and writes
    back whatever changed once the request is handled.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self._changed: set[str] = set()

    def get(self, key: str) -> Optional[str]:
        """Read a session value."""
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        """Store a session value and mark it for write back."""
        self._values[key] = value
        self._changed.add(key)

    def changed(self) -> dict[str, str]:
        """Values set during the request."""
        return {key: self._values[key] for key in self._changed}

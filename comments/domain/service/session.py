"""Client session contract and guest identity tokens."""

import secrets
from typing import Optional

SESSION_TOKEN_KEY = "comments_session"


class SessionStore:
    """Interface for the client's session storage.

    The host platform owns sessions; adapters wrap whatever it provides
    (a cookie, a server-side session) behind get/set.
    """

    def get(self, key: str) -> Optional[str]:
        """Read a session value, None when unset."""
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        """Store a session value."""
        raise NotImplementedError


def peek_session_token(session: Optional[SessionStore]) -> Optional[str]:
    """Return the guest token if one has been issued, without creating it."""
    if session is None:
        return None
    return session.get(SESSION_TOKEN_KEY) or None


def ensure_session_token(session: SessionStore) -> str:
    """Return the guest token, generating and storing one on first use."""
    token = session.get(SESSION_TOKEN_KEY)
    if not token:
        token = secrets.token_hex(16)
        session.set(SESSION_TOKEN_KEY, token)
    return token

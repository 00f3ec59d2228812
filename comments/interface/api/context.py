"""Per-request actor and session resolution.

The host platform signs users in and hands us a JWT cookie; everything
else (guest identity, IP, user agent) comes from the request itself.
"""

from uuid import UUID

import logfire
from fastapi import Request, Response

from comments.adapter.session import DictSessionStore
from comments.domain.service import SESSION_TOKEN_KEY, JWTService
from comments.domain.value import Actor, UserId
from comments.interface.error import AuthenticationRequiredError

SESSION_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


def resolve_actor(
    request: Request, jwt_service: JWTService, auth_token: str | None
) -> Actor:
    """Build the actor for a request.

    A missing or invalid token yields a guest rather than an error, so
    guest-permitted operations keep working.

    Args:
        request: Incoming request (client address, user agent)
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie

    Returns:
        Actor for the request
    """
    ip_address = request.client.host if request.client else None
    user_agent = request.headers.get("user-agent")

    payload = jwt_service.get_payload_from_token(auth_token)
    if payload is None:
        return Actor(ip_address=ip_address, user_agent=user_agent)

    try:
        user_id = UserId(UUID(payload.user_id))
    except ValueError:
        logfire.warn("Token subject is not a user id", subject=payload.user_id)
        return Actor(ip_address=ip_address, user_agent=user_agent)

    return Actor(
        user_id=user_id,
        is_admin=payload.is_admin,
        is_trusted=payload.is_trusted,
        ip_address=ip_address,
        user_agent=user_agent,
    )


def require_user(actor: Actor, action: str) -> UserId:
    """Return the actor's user id.

    Args:
        actor: Current actor
        action: Operation being attempted, used in the error message

    Raises:
        AuthenticationRequiredError: If the actor is a guest
    """
    if actor.user_id is None:
        raise AuthenticationRequiredError(action)
    return actor.user_id


def open_session(session_cookie: str | None) -> DictSessionStore:
    """Seed a session store from the guest session cookie."""
    if not session_cookie:
        return DictSessionStore()
    return DictSessionStore({SESSION_TOKEN_KEY: session_cookie})


def commit_session(response: Response, session: DictSessionStore) -> None:
    """Write session values set during the request back as cookies."""
    for key, value in session.changed().items():
        response.set_cookie(
            key=key,
            value=value,
            max_age=SESSION_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
        )

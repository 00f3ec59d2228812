"""Unit tests for per-request actor and session resolution."""

from uuid import uuid4

import pytest
from fastapi import HTTPException, Request, Response

from comments.adapter.session import DictSessionStore
from comments.config import AuthSettings
from comments.domain.service import SESSION_TOKEN_KEY, JWTService
from comments.domain.value import Actor
from comments.interface.api.context import (
    commit_session,
    open_session,
    require_user,
    resolve_actor,
)
from comments.interface.api.routes.moderation import _require_admin
from comments.interface.error import AuthenticationRequiredError


def _request(user_agent: str = "pytest-agent") -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/",
            "headers": [(b"user-agent", user_agent.encode())],
            "client": ("203.0.113.9", 50000),
        }
    )


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(AuthSettings(jwt_secret="unit-test-secret-0123456789abcdef"))


class TestResolveActor:
    """Tests for resolve_actor."""

    def test_no_token_is_guest(self, jwt_service):
        """Requests without a token act as guests."""
        actor = resolve_actor(_request(), jwt_service, None)

        assert actor.is_guest
        assert actor.ip_address == "203.0.113.9"
        assert actor.user_agent == "pytest-agent"

    def test_invalid_token_is_guest(self, jwt_service):
        """A token that fails verification degrades to a guest."""
        actor = resolve_actor(_request(), jwt_service, "not.a.token")

        assert actor.is_guest

    def test_token_from_other_secret_is_guest(self, jwt_service):
        """Tokens signed with another secret are not trusted."""
        other = JWTService(AuthSettings(jwt_secret="another-secret-0123456789abcdefgh"))
        token = other.create_token(str(uuid4()))

        assert resolve_actor(_request(), jwt_service, token).is_guest

    def test_valid_token_carries_roles(self, jwt_service):
        """Signed-in users keep their admin and trusted flags."""
        user_id = uuid4()
        token = jwt_service.create_token(str(user_id), is_admin=True, is_trusted=True)

        actor = resolve_actor(_request(), jwt_service, token)

        assert actor.user_id == user_id
        assert actor.is_admin
        assert actor.is_trusted

    def test_non_uuid_subject_is_guest(self, jwt_service):
        """A subject that is not a user id cannot be trusted."""
        token = jwt_service.create_token("did:plc:abc123")

        assert resolve_actor(_request(), jwt_service, token).is_guest


class TestRequireUser:
    """Tests for require_user."""

    def test_guest_rejected(self):
        with pytest.raises(AuthenticationRequiredError) as exc_info:
            require_user(Actor(), "subscribe")

        assert exc_info.value.action == "subscribe"
        assert str(exc_info.value) == "Authentication required to subscribe"

    def test_user_id_returned(self):
        user_id = uuid4()

        assert require_user(Actor(user_id=user_id), "subscribe") == user_id


class TestRequireAdmin:
    """Tests for the moderation guard."""

    def test_guest_is_unauthorized(self, jwt_service):
        with pytest.raises(HTTPException) as exc_info:
            _require_admin(_request(), jwt_service, None)

        assert exc_info.value.status_code == 401

    def test_member_is_forbidden(self, jwt_service):
        token = jwt_service.create_token(str(uuid4()))

        with pytest.raises(HTTPException) as exc_info:
            _require_admin(_request(), jwt_service, token)

        assert exc_info.value.status_code == 403

    def test_admin_passes(self, jwt_service):
        token = jwt_service.create_token(str(uuid4()), is_admin=True)

        assert _require_admin(_request(), jwt_service, token).is_admin


class TestSessionCookies:
    """Tests for open_session and commit_session."""

    def test_cookie_seeds_guest_token(self):
        """The guest cookie becomes the session token."""
        session = open_session("abc123")

        assert session.get(SESSION_TOKEN_KEY) == "abc123"
        assert session.changed() == {}

    def test_missing_cookie_gives_empty_session(self):
        assert open_session(None).get(SESSION_TOKEN_KEY) is None

    def test_only_changed_values_are_written(self):
        """Untouched sessions set no cookies."""
        response = Response()

        commit_session(response, open_session("abc123"))

        assert response.headers.getlist("set-cookie") == []

    def test_new_token_is_written_back(self):
        """A token issued during the request is sent to the client."""
        response = Response()
        session = DictSessionStore()
        session.set(SESSION_TOKEN_KEY, "fresh-token")

        commit_session(response, session)

        [cookie] = response.headers.getlist("set-cookie")
        assert cookie.startswith(f"{SESSION_TOKEN_KEY}=fresh-token")
        assert "HttpOnly" in cookie
        assert "samesite=lax" in cookie.lower()

"""Unit tests for DictSessionStore and guest session tokens."""

from comments.adapter.session import DictSessionStore
from comments.domain.service import (
    SESSION_TOKEN_KEY,
    ensure_session_token,
    peek_session_token,
)


class TestDictSessionStore:
    """Tests for DictSessionStore."""

    def test_seeded_values_are_not_changes(self):
        store = DictSessionStore({"a": "1"})

        assert store.get("a") == "1"
        assert store.changed() == {}

    def test_set_marks_value_changed(self):
        store = DictSessionStore({"a": "1"})

        store.set("b", "2")

        assert store.get("b") == "2"
        assert store.changed() == {"b": "2"}


class TestSessionToken:
    """Tests for ensure_session_token and peek_session_token."""

    def test_token_is_created_once(self):
        """The first call issues a token; later calls reuse it."""
        store = DictSessionStore()

        first = ensure_session_token(store)
        second = ensure_session_token(store)

        assert first == second
        assert len(first) == 32
        assert store.changed() == {SESSION_TOKEN_KEY: first}

    def test_existing_token_is_kept(self):
        store = DictSessionStore({SESSION_TOKEN_KEY: "abc"})

        assert ensure_session_token(store) == "abc"
        assert store.changed() == {}

    def test_peek_never_creates(self):
        store = DictSessionStore()

        assert peek_session_token(store) is None
        assert peek_session_token(None) is None
        assert store.changed() == {}

"""Test configuration and shared builders."""

from uuid import uuid4

from comments.config import (
    CommentSettings,
    NotificationSettings,
    SecuritySettings,
    Settings,
)
from comments.domain.model.owner import Owner
from comments.domain.model.user import User
from comments.domain.value import (
    Actor,
    CommentSubmission,
    OwnerId,
    SiteId,
    UserId,
)

SITE_ID = SiteId(1)


def make_settings(
    comments: CommentSettings | None = None,
    notifications: NotificationSettings | None = None,
    security: SecuritySettings | None = None,
) -> Settings:
    """Settings for tests, independent of the environment's .env values."""
    return Settings(
        environment="test",
        comments=comments or CommentSettings(),
        notifications=notifications or NotificationSettings(),
        security=security or SecuritySettings(),
    )


def make_owner(
    author_id: UserId | None = None, type: str = "entry", **kwargs
) -> Owner:
    """Helper to build a live owner that accepts comments."""
    return Owner(
        id=OwnerId(uuid4()),
        site_id=SITE_ID,
        type=type,
        title=kwargs.pop("title", "A test entry"),
        author_id=author_id,
        **kwargs,
    )


def make_user(first_name: str = "Ada", last_name: str = "Lovelace") -> User:
    """Helper to build a registered user with an address."""
    user_id = UserId(uuid4())
    return User(
        id=user_id,
        email=f"{first_name.lower()}.{str(user_id)[:8]}@example.com",
        first_name=first_name,
        last_name=last_name,
    )


def member(user: User, **kwargs) -> Actor:
    """Actor for a signed-in user."""
    return Actor(user_id=user.id, ip_address="203.0.113.7", **kwargs)


def admin(user: User) -> Actor:
    """Actor for an administrator."""
    return Actor(user_id=user.id, is_admin=True)


def guest(ip_address: str = "198.51.100.23") -> Actor:
    """Actor for a visitor who is not signed in."""
    return Actor(ip_address=ip_address, user_agent="Mozilla/5.0")


def submission(owner: Owner, text: str = "Great post!", **kwargs) -> CommentSubmission:
    """Helper to build a submission for an owner."""
    return CommentSubmission(
        owner_id=owner.id, owner_site_id=owner.site_id, comment=text, **kwargs
    )

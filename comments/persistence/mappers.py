"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from comments.domain.model import (
    Comment,
    Flag,
    Owner,
    StructureNode,
    Subscription,
    User,
    Vote,
)
from comments.domain.value import (
    CommentId,
    CommentStatus,
    FlagId,
    OwnerId,
    SiteId,
    StructureId,
    SubscriptionId,
    UserId,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> Optional[UUID]:
    """Normalise a UUID column value (drivers may return str)."""
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    The body is stored with shortcodes already, so it passes through the
    entity's emoji encoding unchanged.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    user_id = _uuid(row.get("user_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        owner_id=OwnerId(_uuid(row["owner_id"])),
        owner_type=row.get("owner_type") or "",
        owner_site_id=SiteId(row["owner_site_id"]),
        user_id=UserId(user_id) if user_id else None,
        name=row.get("name"),
        email=row.get("email"),
        url=row.get("url"),
        comment=row["comment"],
        status=CommentStatus(row["status"]),
        ip_address=row.get("ip_address"),
        user_agent=row.get("user_agent"),
        comment_date=row.get("comment_date"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = comment.model_dump()
    data["status"] = comment.status.value
    if data["id"] is None:
        del data["id"]  # Assigned by the database
    return data


def row_to_flag(row: Dict[str, Any]) -> Flag:
    """Convert database row to Flag domain model."""
    user_id = _uuid(row.get("user_id"))
    return Flag(
        id=FlagId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_id=UserId(user_id) if user_id else None,
        session_id=row.get("session_id"),
        last_ip=row.get("last_ip"),
        created_at=row["created_at"],
    )


def flag_to_dict(flag: Flag) -> Dict[str, Any]:
    """Convert Flag domain model to database dict."""
    return flag.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    user_id = _uuid(row.get("user_id"))
    return Vote(
        id=VoteId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_id=UserId(user_id) if user_id else None,
        session_id=row.get("session_id"),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    data = vote.model_dump()
    data["vote_type"] = vote.vote_type.value
    return data


def row_to_subscription(row: Dict[str, Any]) -> Subscription:
    """Convert database row to Subscription domain model."""
    user_id = _uuid(row.get("user_id"))
    comment_id = _uuid(row.get("comment_id"))
    return Subscription(
        id=SubscriptionId(_uuid(row["id"])),
        owner_id=OwnerId(_uuid(row["owner_id"])),
        owner_site_id=SiteId(row["owner_site_id"]),
        user_id=UserId(user_id) if user_id else None,
        comment_id=CommentId(comment_id) if comment_id else None,
        subscribed=row["subscribed"],
    )


def subscription_to_dict(subscription: Subscription) -> Dict[str, Any]:
    """Convert Subscription domain model to database dict."""
    return subscription.model_dump()


def row_to_structure_node(row: Dict[str, Any]) -> StructureNode:
    """Convert database row to StructureNode."""
    return StructureNode(
        structure_id=StructureId(_uuid(row["structure_id"])),
        element_id=_uuid(row["element_id"]),
        parent_id=_uuid(row.get("parent_id")),
        level=row["level"],
        path=row["path"],
    )


def row_to_owner(row: Dict[str, Any]) -> Owner:
    """Convert database row to Owner read model."""
    author_id = _uuid(row.get("author_id"))
    return Owner(
        id=OwnerId(_uuid(row["id"])),
        site_id=SiteId(row["site_id"]),
        type=row["type"],
        title=row.get("title") or "",
        author_id=UserId(author_id) if author_id else None,
        comments_enabled=row["comments_enabled"],
        deleted_at=row.get("deleted_at"),
    )


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User read model."""
    return User(
        id=UserId(_uuid(row["id"])),
        email=row.get("email"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
    )

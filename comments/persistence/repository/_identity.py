"""Shared filter for rows identified by user or guest session."""

from typing import Any, Optional

from sqlalchemy import Table, and_

from comments.domain.value import CommentId, UserId


def identity_clause(
    table: Table,
    comment_id: CommentId,
    user_id: Optional[UserId],
    session_id: Optional[str],
) -> Any:
    """Match the row placed on a comment by a user, or else by a guest session."""
    if user_id is not None:
        return and_(table.c.comment_id == comment_id, table.c.user_id == user_id)
    return and_(
        table.c.comment_id == comment_id,
        table.c.user_id.is_(None),
        table.c.session_id == session_id,
    )

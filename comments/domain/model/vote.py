"""Vote entity.

Votes curate comments in both directions. Each identity holds at most one
vote per comment; voting the other way flips it.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from comments.domain.model.common import DomainModel
from comments.domain.value import CommentId, UserId, VoteId, VoteType


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per identity per comment (enforced by unique constraints)
    - Identity is user_id for registered users, session_id for guests
    """

    id: VoteId
    comment_id: CommentId
    user_id: Optional[UserId] = None
    session_id: Optional[str] = None
    vote_type: VoteType = VoteType.UP
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def require_identity(self) -> "Vote":
        """Guests must be identified by a session token."""
        if self.user_id is None and not self.session_id:
            raise ValueError("session_id is required when user_id is absent")
        return self

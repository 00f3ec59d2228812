"""Subscription entity.

Who is notified of new comments on a thread. A subscription without a
comment_id covers the whole thread on the owner.
"""

from typing import Optional

from comments.domain.model.common import DomainModel
from comments.domain.value import CommentId, OwnerId, SiteId, SubscriptionId, UserId


class Subscription(DomainModel):
    """Subscription entity keyed by (owner, site, user, comment)."""

    id: SubscriptionId
    owner_id: OwnerId
    owner_site_id: SiteId
    user_id: Optional[UserId] = None
    comment_id: Optional[CommentId] = None
    subscribed: bool = True

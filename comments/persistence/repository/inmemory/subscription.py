"""In-memory subscription repository for testing."""

from typing import Optional

from comments.domain.model.subscription import Subscription
from comments.domain.repository.subscription import SubscriptionRepository
from comments.domain.value import CommentId, OwnerId, SiteId, SubscriptionId, UserId


class InMemorySubscriptionRepository(SubscriptionRepository):
    """In-memory implementation of SubscriptionRepository for testing."""

    def __init__(self) -> None:
        self._subscriptions: dict[SubscriptionId, Subscription] = {}

    async def find_by_key(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        user_id: Optional[UserId],
        comment_id: Optional[CommentId],
    ) -> Optional[Subscription]:
        """Find the subscription for a key tuple."""
        for s in self._subscriptions.values():
            if (
                s.owner_id == owner_id
                and s.owner_site_id == site_id
                and s.user_id == user_id
                and s.comment_id == comment_id
            ):
                return s
        return None

    async def find_subscribed(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        comment_id: Optional[CommentId] = None,
    ) -> list[Subscription]:
        """Find active subscriptions to a thread or to a comment's replies."""
        return [
            s
            for s in self._subscriptions.values()
            if s.owner_id == owner_id
            and s.owner_site_id == site_id
            and s.comment_id == comment_id
            and s.subscribed
        ]

    async def save(self, subscription: Subscription) -> Subscription:
        """Save a subscription, upserting on its key tuple."""
        existing = await self.find_by_key(
            subscription.owner_id,
            subscription.owner_site_id,
            subscription.user_id,
            subscription.comment_id,
        )
        if existing is not None:
            subscription = existing.model_copy(
                update={"subscribed": subscription.subscribed}
            )
        self._subscriptions[subscription.id] = subscription
        return subscription

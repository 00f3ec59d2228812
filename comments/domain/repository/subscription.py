"""Subscription repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from comments.domain.model.subscription import Subscription
from comments.domain.value import CommentId, OwnerId, SiteId, UserId


class SubscriptionRepository(ABC):
    """Repository for Subscription entity."""

    @abstractmethod
    async def find_by_key(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        user_id: Optional[UserId],
        comment_id: Optional[CommentId],
    ) -> Optional[Subscription]:
        """Find the subscription row for a key tuple.

        Returns:
            The subscription if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_subscribed(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        comment_id: Optional[CommentId] = None,
    ) -> List[Subscription]:
        """Find active subscriptions for a thread or a single comment.

        Args:
            owner_id: The owner ID
            site_id: The owner's site
            comment_id: None for whole-thread subscriptions

        Returns:
            Subscriptions with subscribed=True
        """
        pass

    @abstractmethod
    async def save(self, subscription: Subscription) -> Subscription:
        """Save a subscription, upserting on its key tuple.

        When a row already exists for the owner, site, user and comment,
        that row keeps its id and takes the new subscribed state.

        Returns:
            The stored subscription
        """
        pass

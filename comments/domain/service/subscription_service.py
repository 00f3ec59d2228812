"""Subscription domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from comments.domain.model.subscription import Subscription
from comments.domain.repository import SubscriptionRepository
from comments.domain.value import (
    Actor,
    CommentId,
    OwnerId,
    SiteId,
    SubscriptionId,
    UserId,
)

from .base import Service


class SubscriptionService(Service):
    """Tracks who is notified of new comments on a thread."""

    def __init__(self, subscription_repository: SubscriptionRepository) -> None:
        """Initialize subscription service.

        Args:
            subscription_repository: Subscription repository
        """
        self.subscription_repository = subscription_repository

    async def subscribe(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        user_id: UserId,
        comment_id: Optional[CommentId] = None,
    ) -> Subscription:
        """Subscribe a user to a thread or to replies on a comment."""
        return await self.set_subscription(
            owner_id, site_id, user_id, comment_id, subscribed=True
        )

    async def set_subscription(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        user_id: UserId,
        comment_id: Optional[CommentId],
        subscribed: bool,
    ) -> Subscription:
        """Create or update a subscription with an explicit state.

        Args:
            owner_id: Owner the thread belongs to
            site_id: Owner's site
            user_id: Subscribing user
            comment_id: Comment to follow replies on (None = whole thread)
            subscribed: Desired state

        Returns:
            The stored subscription
        """
        with logfire.span(
            "set_subscription",
            owner_id=str(owner_id),
            user_id=str(user_id),
            comment_id=str(comment_id),
            subscribed=subscribed,
        ):
            existing = await self.subscription_repository.find_by_key(
                owner_id, site_id, user_id, comment_id
            )
            if existing and existing.subscribed == subscribed:
                return existing

            subscription = Subscription(
                id=existing.id if existing else SubscriptionId(uuid4()),
                owner_id=owner_id,
                owner_site_id=site_id,
                user_id=user_id,
                comment_id=comment_id,
                subscribed=subscribed,
            )
            saved = await self.subscription_repository.save(subscription)
            if existing is None:
                logfire.info("Subscription created", owner_id=str(owner_id))
            return saved

    async def is_subscribed(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        actor: Actor,
        comment_id: Optional[CommentId] = None,
    ) -> bool:
        """Whether the actor follows a thread (guests never do)."""
        if actor.user_id is None:
            return False
        subscription = await self.subscription_repository.find_by_key(
            owner_id, site_id, actor.user_id, comment_id
        )
        return subscription is not None and subscription.subscribed

    async def find_subscribers(
        self,
        owner_id: OwnerId,
        site_id: SiteId,
        comment_id: Optional[CommentId] = None,
    ) -> list[UserId]:
        """Registered users subscribed to a thread or to a comment's replies."""
        subscriptions = await self.subscription_repository.find_subscribed(
            owner_id, site_id, comment_id
        )
        return [s.user_id for s in subscriptions if s.user_id is not None]

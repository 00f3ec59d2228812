"""Set subscription use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from comments.domain.error import NotAuthorizedError
from comments.domain.service import SubscriptionService
from comments.domain.value import Actor, CommentId, OwnerId, SiteId


class SetSubscriptionRequest(BaseModel):
    """Set subscription request."""

    owner_id: str  # UUID string
    site_id: int
    comment_id: Optional[str] = None  # None follows the whole thread
    subscribed: bool = True
    actor: Actor


class SetSubscriptionResponse(BaseModel):
    """Set subscription response."""

    owner_id: str
    comment_id: Optional[str]
    subscribed: bool


class SetSubscriptionUseCase:
    """Use case for following or unfollowing a thread or a comment."""

    def __init__(self, subscription_service: SubscriptionService) -> None:
        """Initialize set subscription use case.

        Args:
            subscription_service: Subscription domain service
        """
        self.subscription_service = subscription_service

    async def execute(self, request: SetSubscriptionRequest) -> SetSubscriptionResponse:
        """Execute set subscription flow.

        Raises:
            NotAuthorizedError: If the actor is a guest
        """
        actor = request.actor
        if actor.user_id is None:
            raise NotAuthorizedError("subscription", request.owner_id, None)

        subscription = await self.subscription_service.set_subscription(
            OwnerId(UUID(request.owner_id)),
            SiteId(request.site_id),
            actor.user_id,
            CommentId(UUID(request.comment_id)) if request.comment_id else None,
            request.subscribed,
        )
        return SetSubscriptionResponse(
            owner_id=request.owner_id,
            comment_id=request.comment_id,
            subscribed=subscription.subscribed,
        )

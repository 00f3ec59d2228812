"""Get thread use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from comments.application.usecase.base import BaseUseCase
from comments.domain.service import (
    CommentService,
    FlagService,
    SessionStore,
    VoteService,
)
from comments.domain.value import Actor, Capability, OwnerId, SiteId


class ThreadComment(BaseModel):
    """Comment item in a thread, with everything a UI needs to render it."""

    comment_id: str
    parent_id: str | None
    level: int
    text: str
    excerpt: str
    author_name: str
    is_guest: bool
    url: str | None
    comment_date: datetime | None
    time_ago: str
    upvotes: int
    downvotes: int
    net_score: int
    is_poorly_rated: bool
    has_flagged: bool
    can_flag: bool
    can_vote: bool
    can_reply: bool
    can_edit: bool
    can_trash: bool
    trash_url: str | None
    is_subscribed: bool


class GetThreadRequest(BaseModel):
    """Get thread request."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    owner_id: str  # UUID string
    site_id: int
    actor: Actor
    session: Optional[SessionStore] = None
    include_flagged: bool = False


class GetThreadResponse(BaseModel):
    """Get thread response."""

    owner_id: str
    comments: list[ThreadComment]
    total: int


class GetThreadUseCase(BaseUseCase[GetThreadRequest, GetThreadResponse]):
    """Use case for reading the approved comments of an owner in thread order."""

    def __init__(
        self,
        comment_service: CommentService,
        flag_service: FlagService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get thread use case.

        Args:
            comment_service: Comment domain service
            flag_service: Flag service (per-actor flag state)
            vote_service: Vote service (scores)
        """
        self.comment_service = comment_service
        self.flag_service = flag_service
        self.vote_service = vote_service

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Comments at or over the flag limit are left out unless
        include_flagged is set.

        Args:
            request: Get thread request

        Returns:
            Comments in thread order with derived read models
        """
        actor = request.actor
        thread = await self.comment_service.get_thread(
            OwnerId(UUID(request.owner_id)),
            SiteId(request.site_id),
            include_flagged=request.include_flagged,
        )

        items: list[ThreadComment] = []
        for comment, node in thread:
            author = await self.comment_service.get_author(comment)
            upvotes = await self.vote_service.get_upvotes(comment)
            downvotes = await self.vote_service.get_downvotes(comment)
            context = await self.comment_service.capability_context(comment, actor)
            policy = self.comment_service.policy

            items.append(
                ThreadComment(
                    comment_id=str(comment.id),
                    parent_id=str(node.parent_id) if node.parent_id else None,
                    level=node.level,
                    text=comment.text,
                    excerpt=comment.get_excerpt(),
                    author_name=author.full_name,
                    is_guest=comment.is_guest,
                    url=comment.url,
                    comment_date=comment.comment_date,
                    time_ago=comment.get_time_ago(),
                    upvotes=upvotes,
                    downvotes=downvotes,
                    net_score=upvotes - downvotes,
                    is_poorly_rated=context.poorly_rated,
                    has_flagged=await self.flag_service.has_flagged(
                        comment, actor, request.session
                    ),
                    can_flag=policy.can(Capability.FLAG, context),
                    can_vote=policy.can(Capability.VOTE, context),
                    can_reply=policy.can(Capability.REPLY, context),
                    can_edit=policy.can(Capability.EDIT, context),
                    can_trash=policy.can(Capability.TRASH, context),
                    trash_url=self.comment_service.trash_url(comment),
                    is_subscribed=await self.comment_service.is_subscribed(
                        comment, actor
                    ),
                )
            )

        return GetThreadResponse(
            owner_id=request.owner_id, comments=items, total=len(items)
        )

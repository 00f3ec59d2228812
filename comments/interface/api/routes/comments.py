"""Comment routes."""

from datetime import datetime

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Request, status
from pydantic import BaseModel, Field

from comments.application.usecase.comment import (
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
    SubmitCommentRequest,
    SubmitCommentResponse,
    SubmitCommentUseCase,
)
from comments.application.usecase.moderation import (
    TrashCommentRequest,
    TrashCommentResponse,
    TrashCommentUseCase,
)
from comments.domain.error import NotAuthorizedError, NotFoundError
from comments.domain.service import JWTService
from comments.interface.api.context import open_session, resolve_actor

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class SubmitCommentAPIRequest(BaseModel):
    """API request for posting a comment."""

    owner_id: str
    site_id: int = 1
    comment: str = Field(max_length=100000)
    new_parent_id: str | None = None  # Parent comment ID for replies
    name: str | None = None
    email: str | None = None
    url: str | None = None
    honeypot: str | None = None
    rendered_at: datetime | None = None


class EditCommentAPIRequest(BaseModel):
    """API request for editing a comment.

    Omit new_parent_id to keep the comment where it is; send null to move
    it to the thread root.
    """

    owner_id: str
    site_id: int = 1
    comment: str = Field(max_length=100000)
    new_parent_id: str | None = None
    name: str | None = None
    email: str | None = None
    url: str | None = None


async def _submit(
    use_case: SubmitCommentUseCase, request: SubmitCommentRequest
) -> SubmitCommentResponse:
    """Run a submission and map domain failures to HTTP errors."""
    try:
        result = await use_case.execute(request)
    except NotFoundError as e:
        logfire.warn("Comment submission failed - not found", error=str(e))
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized comment submission", error=str(e))
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"errors": result.errors},
        )
    return result


@router.post(
    "/comments",
    response_model=SubmitCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_comment(
    request: Request,
    body: SubmitCommentAPIRequest,
    submit_comment_use_case: FromDishka[SubmitCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SubmitCommentResponse:
    """Post a new comment or reply.

    Guests may post when guest commenting is enabled.

    Args:
        request: Incoming request
        body: Comment data
        submit_comment_use_case: Submit comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The saved comment

    Raises:
        HTTPException: 422 with field errors if validation fails, 404 if the
            parent comment does not exist
    """
    actor = resolve_actor(request, jwt_service, auth_token)
    use_case_request = SubmitCommentRequest(
        owner_id=body.owner_id,
        site_id=body.site_id,
        comment=body.comment,
        actor=actor,
        new_parent_id=body.new_parent_id,
        name=body.name,
        email=body.email,
        url=body.url,
        honeypot=body.honeypot,
        rendered_at=body.rendered_at,
    )
    return await _submit(submit_comment_use_case, use_case_request)


@router.patch("/comments/{comment_id}", response_model=SubmitCommentResponse)
async def edit_comment(
    comment_id: str,
    request: Request,
    body: EditCommentAPIRequest,
    submit_comment_use_case: FromDishka[SubmitCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SubmitCommentResponse:
    """Edit a comment, optionally moving it in the thread.

    Only the author (or an administrator) can edit.

    Args:
        comment_id: Comment UUID
        request: Incoming request
        body: Updated comment data
        submit_comment_use_case: Submit comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The saved comment
    """
    actor = resolve_actor(request, jwt_service, auth_token)
    fields = body.model_dump(exclude_unset=True)
    fields.setdefault("site_id", body.site_id)
    use_case_request = SubmitCommentRequest(
        comment_id=comment_id, actor=actor, **fields
    )
    return await _submit(submit_comment_use_case, use_case_request)


@router.get("/owners/{owner_id}/comments", response_model=GetThreadResponse)
async def get_thread(
    owner_id: str,
    request: Request,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    jwt_service: FromDishka[JWTService],
    site_id: int = 1,
    auth_token: str | None = Cookie(default=None),
    comments_session: str | None = Cookie(default=None),
) -> GetThreadResponse:
    """Get the approved comments of an owner in thread order.

    Comments flagged past the limit are hidden. If authenticated, each
    comment carries the caller's capabilities and subscription state.

    Args:
        owner_id: Owner UUID
        request: Incoming request
        get_thread_use_case: Get thread use case from DI
        jwt_service: JWT service for token verification (injected)
        site_id: Owner's site
        auth_token: JWT token from cookie (optional)
        comments_session: Guest session cookie (optional)

    Returns:
        Comments in thread order
    """
    actor = resolve_actor(request, jwt_service, auth_token)
    try:
        use_case_request = GetThreadRequest(
            owner_id=owner_id,
            site_id=site_id,
            actor=actor,
            session=open_session(comments_session),
        )
        return await get_thread_use_case.execute(use_case_request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/comments/{comment_id}/trash", response_model=TrashCommentResponse)
async def trash_comment(
    comment_id: str,
    request: Request,
    trash_comment_use_case: FromDishka[TrashCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> TrashCommentResponse:
    """Move one's own comment to the trash.

    Args:
        comment_id: Comment UUID
        request: Incoming request
        trash_comment_use_case: Trash comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The comment's new status

    Raises:
        HTTPException: 401 for guests, 403 if not the author, 404 if missing
    """
    actor = resolve_actor(request, jwt_service, auth_token)
    if actor.is_guest:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required to trash comments",
        )

    try:
        return await trash_comment_use_case.execute(
            TrashCommentRequest(comment_id=comment_id, actor=actor)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotAuthorizedError as e:
        logfire.warn("Unauthorized trash attempt", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to trash this comment",
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

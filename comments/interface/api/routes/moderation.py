"""Moderation routes (administrators only)."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Request, status
from pydantic import BaseModel, Field

from comments.application.usecase.moderation import (
    BulkSetStatusRequest,
    BulkSetStatusResponse,
    BulkSetStatusUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    UpdateCommentStatusRequest,
    UpdateCommentStatusResponse,
    UpdateCommentStatusUseCase,
)
from comments.domain.error import NotAuthorizedError, NotFoundError
from comments.domain.service import JWTService
from comments.domain.value import Actor, CommentStatus
from comments.interface.api.context import resolve_actor

router = APIRouter(prefix="/moderation", tags=["moderation"], route_class=DishkaRoute)


class SetStatusAPIRequest(BaseModel):
    """API request for changing one comment's status."""

    status: CommentStatus


class BulkSetStatusAPIRequest(BaseModel):
    """API request for changing the status of several comments."""

    comment_ids: list[str] = Field(min_length=1)
    status: CommentStatus


def _require_admin(request: Request, jwt_service: JWTService, auth_token) -> Actor:
    actor = resolve_actor(request, jwt_service, auth_token)
    if actor.is_guest:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required for moderation",
        )
    if not actor.is_admin:
        logfire.warn("Moderation attempt by non-admin", user_id=str(actor.user_id))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required",
        )
    return actor


@router.put(
    "/comments/{comment_id}/status", response_model=UpdateCommentStatusResponse
)
async def set_status(
    comment_id: str,
    body: SetStatusAPIRequest,
    request: Request,
    update_status_use_case: FromDishka[UpdateCommentStatusUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateCommentStatusResponse:
    """Approve, reject, mark as spam or trash a comment.

    Args:
        comment_id: Comment UUID
        body: New status
        request: Incoming request
        update_status_use_case: Update status use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        The comment's new status
    """
    actor = _require_admin(request, jwt_service, auth_token)
    try:
        return await update_status_use_case.execute(
            UpdateCommentStatusRequest(
                comment_id=comment_id, status=body.status, actor=actor
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotAuthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/comments/status", response_model=BulkSetStatusResponse)
async def bulk_set_status(
    body: BulkSetStatusAPIRequest,
    request: Request,
    bulk_set_status_use_case: FromDishka[BulkSetStatusUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> BulkSetStatusResponse:
    """Change the status of several comments.

    Each comment succeeds or fails on its own; failures are listed in the
    response rather than failing the request.

    Args:
        body: Comment ids and new status
        request: Incoming request
        bulk_set_status_use_case: Bulk set status use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Outcome per comment
    """
    actor = _require_admin(request, jwt_service, auth_token)
    return await bulk_set_status_use_case.execute(
        BulkSetStatusRequest(
            comment_ids=body.comment_ids, status=body.status, actor=actor
        )
    )


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    request: Request,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment with its replies, flags and votes.

    Args:
        comment_id: Comment UUID
        request: Incoming request
        delete_comment_use_case: Delete comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        IDs of the deleted comments
    """
    actor = _require_admin(request, jwt_service, auth_token)
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, actor=actor)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotAuthorizedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

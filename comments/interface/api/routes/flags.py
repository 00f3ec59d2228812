"""Flag routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Request, Response, status

from comments.application.usecase.flag import (
    ToggleFlagRequest,
    ToggleFlagResponse,
    ToggleFlagUseCase,
)
from comments.domain.error import NotAuthorizedError, NotFoundError
from comments.domain.service import JWTService
from comments.interface.api.context import commit_session, open_session, resolve_actor

router = APIRouter(tags=["flags"], route_class=DishkaRoute)


@router.post("/comments/{comment_id}/flag", response_model=ToggleFlagResponse)
async def toggle_flag(
    comment_id: str,
    request: Request,
    response: Response,
    toggle_flag_use_case: FromDishka[ToggleFlagUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    comments_session: str | None = Cookie(default=None),
) -> ToggleFlagResponse:
    """Flag a comment, or remove the caller's flag if already flagged.

    Guests are identified by a session cookie, issued on first use.

    Args:
        comment_id: Comment UUID
        request: Incoming request
        response: Outgoing response (session cookie)
        toggle_flag_use_case: Toggle flag use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie (optional)
        comments_session: Guest session cookie (optional)

    Returns:
        Flag state after the toggle

    Raises:
        HTTPException: 403 if flagging is not allowed, 404 if comment not found
    """
    actor = resolve_actor(request, jwt_service, auth_token)
    session = open_session(comments_session)

    try:
        result = await toggle_flag_use_case.execute(
            ToggleFlagRequest(comment_id=comment_id, actor=actor, session=session)
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotAuthorizedError as e:
        logfire.warn("Flag not permitted", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to flag this comment",
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    commit_session(response, session)
    return result

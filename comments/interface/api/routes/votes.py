"""Vote routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Request, Response, status
from pydantic import BaseModel

from comments.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from comments.domain.error import NotAuthorizedError, NotFoundError
from comments.domain.service import JWTService
from comments.domain.value import VoteType
from comments.interface.api.context import commit_session, open_session, resolve_actor

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for voting on a comment."""

    direction: VoteType


@router.post("/comments/{comment_id}/vote", response_model=CastVoteResponse)
async def cast_vote(
    comment_id: str,
    body: CastVoteAPIRequest,
    request: Request,
    response: Response,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    comments_session: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote a comment up or down.

    Voting the same way twice changes nothing; voting the other way
    reverses the caller's vote.

    Args:
        comment_id: Comment UUID
        body: Vote direction
        request: Incoming request
        response: Outgoing response (session cookie)
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie (optional)
        comments_session: Guest session cookie (optional)

    Returns:
        Vote and updated tallies

    Raises:
        HTTPException: 403 if voting is not allowed, 404 if comment not found
    """
    actor = resolve_actor(request, jwt_service, auth_token)
    session = open_session(comments_session)

    try:
        result = await cast_vote_use_case.execute(
            CastVoteRequest(
                comment_id=comment_id,
                direction=body.direction,
                actor=actor,
                session=session,
            )
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotAuthorizedError as e:
        logfire.warn("Vote not permitted", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to vote on this comment",
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    commit_session(response, session)
    return result

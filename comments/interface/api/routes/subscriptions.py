"""Subscription routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Request, status
from pydantic import BaseModel

from comments.application.usecase.subscription import (
    SetSubscriptionRequest,
    SetSubscriptionResponse,
    SetSubscriptionUseCase,
)
from comments.domain.service import JWTService
from comments.interface.api.context import require_user, resolve_actor
from comments.interface.error import AuthenticationRequiredError

router = APIRouter(tags=["subscriptions"], route_class=DishkaRoute)


class SetSubscriptionAPIRequest(BaseModel):
    """API request for following a thread or a comment's replies."""

    site_id: int = 1
    comment_id: str | None = None
    subscribed: bool = True


@router.put("/owners/{owner_id}/subscription", response_model=SetSubscriptionResponse)
async def set_subscription(
    owner_id: str,
    body: SetSubscriptionAPIRequest,
    request: Request,
    set_subscription_use_case: FromDishka[SetSubscriptionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> SetSubscriptionResponse:
    """Subscribe to or unsubscribe from new comments.

    Requires authentication.

    Args:
        owner_id: Owner UUID
        body: Subscription target and desired state
        request: Incoming request
        set_subscription_use_case: Set subscription use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Stored subscription state
    """
    actor = resolve_actor(request, jwt_service, auth_token)
    try:
        require_user(actor, "subscribe")
    except AuthenticationRequiredError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)
        )

    try:
        return await set_subscription_use_case.execute(
            SetSubscriptionRequest(
                owner_id=owner_id,
                site_id=body.site_id,
                comment_id=body.comment_id,
                subscribed=body.subscribed,
                actor=actor,
            )
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

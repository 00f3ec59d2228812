"""Subscription use cases."""

from .set_subscription import (
    SetSubscriptionRequest,
    SetSubscriptionResponse,
    SetSubscriptionUseCase,
)

__all__ = [
    "SetSubscriptionRequest",
    "SetSubscriptionResponse",
    "SetSubscriptionUseCase",
]

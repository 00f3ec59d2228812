"""Notification delivery adapters."""

from .transport import (
    LogNotificationTransport,
    MockNotificationTransport,
    NotificationDeliveryError,
    WebhookNotificationTransport,
)

__all__ = [
    "LogNotificationTransport",
    "MockNotificationTransport",
    "NotificationDeliveryError",
    "WebhookNotificationTransport",
]

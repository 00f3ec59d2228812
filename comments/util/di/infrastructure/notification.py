"""Notification infrastructure providers."""

from dishka import Scope, provide

from comments.adapter.notification import (
    LogNotificationTransport,
    WebhookNotificationTransport,
)
from comments.config import NotificationSettings
from comments.domain.service import NotificationTransport
from comments.util.di.base import ProviderBase
from comments.util.observability import instrument_httpx


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notification_transport(
        self, settings: NotificationSettings
    ) -> NotificationTransport:
        """Provide notification transport.

        Messages are posted to the configured webhook, or only logged when
        no webhook is configured.

        Returns:
            Notification transport
        """
        if not settings.webhook_url:
            return LogNotificationTransport()

        instrument_httpx()
        return WebhookNotificationTransport(
            url=settings.webhook_url, timeout=settings.webhook_timeout
        )

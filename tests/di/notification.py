"""Mock notification providers for testing."""

from dishka import Scope, provide

from comments.adapter.notification import MockNotificationTransport
from comments.domain.service import NotificationTransport
from comments.util.di.infrastructure.notification import NotificationProvider


class MockNotificationProvider(NotificationProvider):
    """Mock notification provider recording messages in memory."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_notification_transport(self) -> NotificationTransport:
        """Provide recording transport."""
        return MockNotificationTransport()

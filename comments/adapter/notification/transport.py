"""Notification transports."""

import httpx
import logfire

from comments.adapter.error import NotificationDeliveryError
from comments.domain.service.notification_service import NotificationTransport
from comments.domain.value import NotificationMessage


class WebhookNotificationTransport(NotificationTransport):
    """Posts notification messages as JSON to a webhook.

    The receiving service owns templating and email delivery.
    """

    def __init__(self, url: str, timeout: float = 5.0) -> None:
        """Initialize webhook transport.

        Args:
            url: Endpoint receiving the messages
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout

    async def send(self, message: NotificationMessage) -> None:
        """POST the message to the webhook.

        Raises:
            NotificationDeliveryError: If the request fails or is rejected
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.url,
                    json=message.model_dump(mode="json"),
                    timeout=self.timeout,
                )

                if response.is_error:
                    logfire.error(
                        "Notification webhook rejected message",
                        status_code=response.status_code,
                        kind=message.kind.value,
                    )
                    raise NotificationDeliveryError(
                        f"Webhook rejected notification: {response.status_code}",
                        kind=message.kind.value,
                        status_code=response.status_code,
                    )

        except httpx.HTTPError as e:
            logfire.error("Notification webhook HTTP error", error=str(e))
            raise NotificationDeliveryError(
                f"HTTP error sending notification: {e}", kind=message.kind.value
            )


class LogNotificationTransport(NotificationTransport):
    """Writes notification messages to the log instead of delivering them."""

    async def send(self, message: NotificationMessage) -> None:
        """Log the message."""
        logfire.info(
            "Notification (not delivered)",
            kind=message.kind.value,
            comment_id=str(message.comment_id),
            recipients=[r.email for r in message.recipients],
        )


class MockNotificationTransport(NotificationTransport):
    """Records messages for tests.

    Set fail_with to make every send raise that exception.
    """

    def __init__(self) -> None:
        self.sent: list[NotificationMessage] = []
        self.fail_with: Exception | None = None

    async def send(self, message: NotificationMessage) -> None:
        """Record the message (or fail if configured to)."""
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(message)

    def of_kind(self, kind: str) -> list[NotificationMessage]:
        """Messages sent for one notification kind."""
        return [m for m in self.sent if m.kind == kind]

"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class NotificationDeliveryError(AdapterError):
    """Raised when a notification transport cannot hand off a message.

    Attributes:
        kind: Notification kind that failed
        status_code: HTTP status returned by the receiver, if one was
    """

    def __init__(
        self, message: str, kind: str, status_code: int | None = None
    ) -> None:
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)

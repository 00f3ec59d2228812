"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AuthenticationRequiredError(InterfaceError):
    """Raised when a guest attempts something only members may do."""

    def __init__(self, action: str) -> None:
        """Initialize authentication error.

        Args:
            action: What the guest tried to do, e.g. "subscribe"
        """
        self.action = action
        super().__init__(f"Authentication required to {action}")

"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Raised when the service is started with unusable settings."""

    def __init__(self, setting: str, reason: str) -> None:
        """Initialize configuration error.

        Args:
            setting: Environment variable name of the offending setting
            reason: What is wrong with it
        """
        self.setting = setting
        self.reason = reason
        super().__init__(f"{setting} {reason}")


class TokenError(UtilError):
    """Raised when an access token cannot be trusted."""

    def __init__(self, message: str, expired: bool = False) -> None:
        self.expired = expired
        super().__init__(message)

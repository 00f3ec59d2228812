"""Core DI providers (non-mockable)."""

from dishka import Provider, Scope, provide

from comments.config import (
    AuthSettings,
    CommentSettings,
    NotificationSettings,
    PrivacySettings,
    SecuritySettings,
    Settings,
)
from comments.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        """Provide commenting settings."""
        return settings.comments

    @provide
    def provide_security_settings(self, settings: Settings) -> SecuritySettings:
        """Provide security settings."""
        return settings.security

    @provide
    def provide_notification_settings(
        self, settings: Settings
    ) -> NotificationSettings:
        """Provide notification settings."""
        return settings.notifications

    @provide
    def provide_privacy_settings(self, settings: Settings) -> PrivacySettings:
        """Provide privacy settings."""
        return settings.privacy


class StaticConfigProvider(Provider):
    """Provides an already loaded Settings instance.

    Registered after ProdConfigProvider so that it takes precedence; the
    app uses it to share the settings it validated at startup, and tests
    use it to pin settings regardless of the environment.
    """

    def __init__(self, settings: Settings) -> None:
        super().__init__()
        self._settings = settings

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide the fixed settings."""
        return self._settings

"""Adapter DI providers."""

from dishka import Scope, provide

from comments.adapter.security import HoneypotSpamChecker
from comments.config import SecuritySettings
from comments.domain.service import SpamChecker
from comments.util.di.base import ProviderBase


class ProdAdapterProvider(ProviderBase):
    """Adapters without external services - concrete, no mocks needed."""

    scope = Scope.APP

    @provide
    def get_spam_checker(self, settings: SecuritySettings) -> SpamChecker:
        """Provide the form-based spam checker."""
        return HoneypotSpamChecker(settings=settings)

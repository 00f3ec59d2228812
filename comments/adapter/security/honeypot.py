"""Form-based spam heuristics."""

from datetime import datetime

import logfire

from comments.config import SecuritySettings
from comments.domain.service.security_service import SpamChecker
from comments.domain.value import SpamCheckFields


class HoneypotSpamChecker(SpamChecker):
    """Rejects forms that fill the hidden field or are submitted too fast.

    Bots tend to fill every input and submit immediately after loading
    the form; people do neither.
    """

    def __init__(self, settings: SecuritySettings) -> None:
        """Initialize checker.

        Args:
            settings: Security configuration (minimum submit time)
        """
        self.settings = settings

    async def verify(self, fields: SpamCheckFields) -> bool:
        """Check the honeypot and the time since the form was rendered."""
        if fields.honeypot:
            logfire.info("Honeypot field filled")
            return False

        if fields.rendered_at is not None:
            now = datetime.now(fields.rendered_at.tzinfo)
            elapsed = (now - fields.rendered_at).total_seconds()
            if elapsed < self.settings.min_submit_seconds:
                logfire.info("Form submitted too quickly", elapsed=elapsed)
                return False

        return True

"""Pre-save spam and security gate."""

import re
from fnmatch import fnmatch

import logfire

from comments.config import SecuritySettings
from comments.domain.model.comment import Comment
from comments.domain.value import SpamCheckFields

from .base import Service

SPAM_MESSAGE = "Form validation failed. Marked as spam."
BLOCKED_MESSAGE = "Comment blocked due to security policy."


class SpamChecker:
    """Interface for spam verification backends.

    Implementations inspect the anti-spam form fields submitted with a
    comment (honeypot, render timestamp) or call out to a third party.
    """

    async def verify(self, fields: SpamCheckFields) -> bool:
        """Check the submitted form fields.

        Args:
            fields: Anti-spam fields from the submission

        Returns:
            True if the submission looks human
        """
        raise NotImplementedError


class SecurityService(Service):
    """Evaluates a candidate comment against spam and security policy."""

    def __init__(self, settings: SecuritySettings, spam_checker: SpamChecker) -> None:
        """Initialize security service.

        Args:
            settings: Security configuration
            spam_checker: Spam verification backend
        """
        self.settings = settings
        self.spam_checker = spam_checker

    async def check(self, comment: Comment, spam_fields: SpamCheckFields) -> list[str]:
        """Run every check against a candidate comment.

        The checks are independent: each failing one contributes its own
        message.

        Args:
            comment: Candidate comment (not yet persisted)
            spam_fields: Anti-spam form fields

        Returns:
            Error messages, empty if the comment passes
        """
        with logfire.span("security_check", comment_id=str(comment.id)):
            errors: list[str] = []

            if self.settings.enable_spam_checks:
                if not await self.spam_checker.verify(spam_fields):
                    logfire.warn("Spam check failed", ip_address=comment.ip_address)
                    errors.append(SPAM_MESSAGE)

            if self.is_blocked(comment):
                logfire.warn("Comment blocked by policy", ip_address=comment.ip_address)
                errors.append(BLOCKED_MESSAGE)

            limit = self.settings.max_length
            if limit is not None and len(comment.text) > limit:
                errors.append(f"Comment must be shorter than {limit} characters.")

            return errors

    def is_blocked(self, comment: Comment) -> bool:
        """Whether the comment or its sender is on a deny list."""
        return (
            self._has_blocked_keyword(comment)
            or self._has_blocked_ip(comment.ip_address)
            or self._has_blocked_user_agent(comment.user_agent)
        )

    def _has_blocked_keyword(self, comment: Comment) -> bool:
        if not self.settings.blocked_keywords:
            return False
        haystack = " ".join(
            part
            for part in (comment.text, comment.name, comment.email, comment.url)
            if part
        )
        for keyword in self.settings.blocked_keywords:
            keyword = keyword.strip()
            if keyword and re.search(
                rf"(?<!\w){re.escape(keyword)}(?!\w)", haystack, re.IGNORECASE
            ):
                return True
        return False

    def _has_blocked_ip(self, ip_address: str | None) -> bool:
        if not ip_address:
            return False
        return any(
            fnmatch(ip_address, pattern) for pattern in self.settings.blocked_ips
        )

    def _has_blocked_user_agent(self, user_agent: str | None) -> bool:
        if not user_agent:
            return False
        agent = user_agent.lower()
        return any(
            blocked.lower() in agent
            for blocked in self.settings.blocked_user_agents
            if blocked
        )

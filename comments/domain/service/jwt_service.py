"""JWT token domain service."""

from typing import Optional

import logfire

from comments.config import AuthSettings
from comments.util.error import TokenError
from comments.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(
        self, user_id: str, is_admin: bool = False, is_trusted: bool = False
    ) -> str:
        """Create JWT token for a user.

        Args:
            user_id: User ID
            is_admin: Whether the user may moderate
            is_trusted: Whether the user's comments skip moderation

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(
                user_id, self.auth_settings, is_admin=is_admin, is_trusted=is_trusted
            )
            logfire.info("JWT token created", user_id=user_id)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            TokenError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", user_id=payload.user_id)
                return payload
            except TokenError as e:
                logfire.error(
                    "JWT token verification failed", error=str(e), expired=e.expired
                )
                raise

    def get_payload_from_token(self, token: Optional[str]) -> Optional[TokenPayload]:
        """Extract the payload without raising.

        Routes use this to treat a missing or invalid token as a guest.

        Args:
            token: JWT token string (optional)

        Returns:
            Payload if the token is valid, None otherwise
        """
        if not token:
            return None

        try:
            return self.verify_token(token)
        except TokenError as e:
            logfire.debug("JWT verification failed, treating as guest", error=str(e))
            return None

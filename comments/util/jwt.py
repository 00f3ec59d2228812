"""JWT token utilities.

Tokens are issued by the host platform when a user signs in; this service
verifies them to identify the actor. create_token exists for the host and
for tests.
"""

from datetime import datetime, timedelta

import jwt
from pydantic import BaseModel, ValidationError

from comments.config import AuthSettings
from comments.util.error import TokenError


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    is_admin: bool = False
    is_trusted: bool = False
    exp: datetime


def create_token(
    user_id: str,
    settings: AuthSettings,
    is_admin: bool = False,
    is_trusted: bool = False,
) -> str:
    """Create a JWT token for a user.

    Args:
        user_id: User ID
        settings: Authentication settings
        is_admin: Whether the user may moderate
        is_trusted: Whether the user's comments skip moderation

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now() + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "is_admin": is_admin,
        "is_trusted": is_trusted,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        TokenError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired", expired=True)
    except jwt.InvalidTokenError:
        raise TokenError("Invalid token")
    except ValidationError:
        raise TokenError("Token payload is malformed")

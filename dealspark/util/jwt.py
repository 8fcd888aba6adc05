"""JWT token utilities.

Identity tokens are issued by the external identity provider. This module
verifies them; ``create_token`` mirrors the provider's claim layout and is
used by tooling and tests.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from dealspark.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: str  # Stable user identifier
    role: str | None = None  # Role claim; missing means member
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    role: str | None,
    settings: AuthSettings,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    """Create a signed identity token.

    Args:
        user_id: User ID (``sub`` claim)
        role: Role claim (omitted when None)
        settings: Authentication settings
        expires_in: Token lifetime

    Returns:
        Encoded JWT token
    """
    payload: dict[str, object] = {
        "sub": user_id,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    if role is not None:
        payload["role"] = role

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
    except ValueError:
        # Claims present but malformed (pydantic validation)
        raise JWTError("Invalid token claims")

"""JWT token utilities.

Tokens are minted by the hosted identity provider. ``create_token`` exists
for local development and tests, which need tokens signed with the same
shared secret.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel, ValidationError

from qna.config import AuthSettings


class TokenPayload(BaseModel):
    """Claims the API relies on."""

    sub: str  # User ID
    email: Optional[str] = None
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    settings: AuthSettings,
    email: Optional[str] = None,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    """Create a signed token for a user.

    Args:
        user_id: Subject (user ID)
        settings: Authentication settings
        email: Optional email claim
        expires_in: Lifetime of the token

    Returns:
        Encoded JWT token
    """
    payload: dict = {
        "sub": user_id,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    if email:
        payload["email"] = email
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience

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
            audience=settings.jwt_audience,
            options={"verify_aud": settings.jwt_audience is not None},
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except (jwt.InvalidTokenError, ValidationError):
        raise JWTError("Invalid token")

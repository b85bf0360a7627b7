"""Verification of identity-provider tokens."""

from uuid import UUID

import logfire

from qna.config import AuthSettings
from qna.domain.value import UserId
from qna.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Turns the ``auth_token`` cookie into the caller's user ID.

    The identity provider signs tokens with a shared secret; the subject
    claim is the user's UUID.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a token and return its claims.

        Raises:
            JWTError: If the token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            return verify_token(token, self.auth_settings)

    def get_user_id_from_token(self, token: str | None) -> UserId | None:
        """User ID of the caller, or None for anonymous callers.

        A missing, expired or forged token and a subject that is not a UUID
        all count as anonymous. Routes that need a user reject None with 401.
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
        except JWTError as e:
            logfire.debug("Token rejected, treating caller as anonymous", error=str(e))
            return None

        try:
            return UserId(UUID(payload.sub))
        except ValueError:
            logfire.warn("Token subject is not a user ID", subject=payload.sub)
            return None

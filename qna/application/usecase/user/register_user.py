"""Register user profile use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from qna.domain.error import ValidationError
from qna.domain.service import UserService
from qna.domain.service.question_service import first_error_message
from qna.domain.value import UserId, Username, UserRole

from ..base import BaseUseCase


class RegisterUserRequest(BaseModel):
    """Register user request."""

    user_id: str  # Subject of the identity provider token
    username: str
    email: str


class RegisterUserResponse(BaseModel):
    """Register user response."""

    user_id: str
    username: str
    email: str
    role: UserRole
    reputation: int
    badge: str
    created_at: datetime


class RegisterUserUseCase(BaseUseCase):
    """Use case for creating the community profile of a signed-in identity."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize register user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: RegisterUserRequest) -> RegisterUserResponse:
        """Execute register flow.

        Raises:
            ValidationError: If the username is malformed
            ConflictError: If the profile exists or the username is taken
        """
        try:
            username = Username(request.username.strip())
        except PydanticValidationError as e:
            raise ValidationError(first_error_message(e))

        user = await self.user_service.register(
            user_id=UserId(UUID(request.user_id)),
            username=username,
            email=request.email.strip(),
        )

        return RegisterUserResponse(
            user_id=str(user.id),
            username=user.username.root,
            email=user.email,
            role=user.role,
            reputation=user.reputation,
            badge=user.badge,
            created_at=user.created_at,
        )

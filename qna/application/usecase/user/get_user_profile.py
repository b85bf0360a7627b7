"""Get user profile use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from qna.domain.error import NotFoundError
from qna.domain.model import BadgeTier, User, badge_progress
from qna.domain.service import QuestionService, UserService
from qna.domain.value import UserId, Username, UserRole


class GetUserProfileRequest(BaseModel):
    """Get user profile request.

    Looks the user up by username, or by ID for the caller's own profile.
    """

    username: str | None = None
    user_id: str | None = None

    def model_post_init(self, __context):
        """Validate that exactly one lookup key is provided."""
        if not self.username and not self.user_id:
            raise ValueError("Either username or user_id must be provided")


class BadgeInfo(BaseModel):
    """Badge tier for display."""

    name: str
    description: str
    icon: str
    minimum_answers: int

    @classmethod
    def from_tier(cls, tier: BadgeTier) -> "BadgeInfo":
        return cls(
            name=tier.name,
            description=tier.description,
            icon=tier.icon,
            minimum_answers=tier.minimum_answers,
        )


class GetUserProfileResponse(BaseModel):
    """Get user profile response."""

    user_id: str
    username: str
    avatar_url: str | None
    role: UserRole
    reputation: int
    answer_count: int
    question_count: int
    badge: BadgeInfo
    next_badge: Optional[BadgeInfo]
    answers_to_next_badge: Optional[int]
    joined_at: datetime


class GetUserProfileUseCase:
    """Use case for a user's profile page with badge progress."""

    def __init__(
        self,
        user_service: UserService,
        question_service: QuestionService,
    ) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
            question_service: Question domain service (question count)
        """
        self.user_service = user_service
        self.question_service = question_service

    async def execute(self, request: GetUserProfileRequest) -> GetUserProfileResponse:
        """Execute get user profile flow.

        Raises:
            NotFoundError: If no such user
        """
        user = await self._find_user(request)

        progress = badge_progress(user.answer_count)
        question_count = await self.question_service.count_by_author(user.id)

        return GetUserProfileResponse(
            user_id=str(user.id),
            username=user.username.root,
            avatar_url=user.avatar_url,
            role=user.role,
            reputation=user.reputation,
            answer_count=user.answer_count,
            question_count=question_count,
            badge=BadgeInfo.from_tier(progress.current),
            next_badge=BadgeInfo.from_tier(progress.next) if progress.next else None,
            answers_to_next_badge=progress.answers_to_next,
            joined_at=user.joined_at,
        )

    async def _find_user(self, request: GetUserProfileRequest) -> User:
        if request.user_id:
            return await self.user_service.get_by_id(UserId(UUID(request.user_id)))

        try:
            username = Username(request.username)
        except ValueError:
            # A malformed username cannot belong to anyone
            raise NotFoundError("User", str(request.username))
        return await self.user_service.get_by_username(username)

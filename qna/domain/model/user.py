"""User aggregate root.

Users are owned by the hosted identity provider; this service keeps the
community profile: reputation, answer count and badge.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from qna.domain.model.badge import BADGE_TIERS
from qna.domain.model.common import DomainModel, utc_now
from qna.domain.value import UserId, Username, UserRole


class User(DomainModel):
    """Community member profile.

    ``answer_count`` and ``badge`` are derived from the user's answers and
    refreshed after each new answer; they may briefly lag behind.
    """

    id: UserId
    username: Username
    email: str = Field(min_length=3, max_length=255)
    avatar_url: Optional[str] = None
    role: UserRole = UserRole.USER
    reputation: int = Field(default=0, ge=0)
    answer_count: int = Field(default=0, ge=0)
    badge: str = BADGE_TIERS[0].name
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def joined_at(self) -> datetime:
        """When the user joined the community."""
        return self.created_at

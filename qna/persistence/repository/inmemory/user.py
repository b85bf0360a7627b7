"""In-memory user repository for testing."""

from typing import Callable, Optional, Sequence

from sqlalchemy.exc import IntegrityError

from qna.domain.model import User
from qna.domain.model.common import utc_now
from qna.domain.repository.user import UserRepository
from qna.domain.value import UserId, Username

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._users = store.users
        self._answers = store.answers

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find user by ID."""
        return self._users.get(user_id)

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find user by username."""
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once."""
        return [self._users[uid] for uid in user_ids if uid in self._users]

    async def save(self, user: User) -> User:
        """Save a user.

        Raises:
            IntegrityError: If another user already has the username
        """
        for other in self._users.values():
            if other.username == user.username and other.id != user.id:
                raise IntegrityError("Duplicate username", None, Exception())
        existing = self._users.get(user.id)
        if existing:
            # Counters keep their stored values, as in PostgreSQL
            user = user.model_copy(
                update={
                    "reputation": existing.reputation,
                    "answer_count": existing.answer_count,
                    "badge": existing.badge,
                    "updated_at": utc_now(),
                }
            )
        self._users[user.id] = user
        return user

    async def adjust_reputation(self, user_id: UserId, delta: int) -> None:
        """Add delta to reputation, clamped at 0."""
        user = self._users.get(user_id)
        if user:
            self._users[user_id] = user.model_copy(
                update={"reputation": max(0, user.reputation + delta)}
            )

    async def refresh_answer_stats(
        self, user_id: UserId, badge_for: Callable[[int], str]
    ) -> Optional[int]:
        """Recount human-written answers and store count and badge."""
        user = self._users.get(user_id)
        if user is None:
            return None

        answer_count = sum(
            1
            for a in self._answers.values()
            if a.author_id == user_id and not a.is_ai_generated
        )
        self._users[user_id] = user.model_copy(
            update={
                "answer_count": answer_count,
                "badge": badge_for(answer_count),
                "updated_at": utc_now(),
            }
        )
        return answer_count

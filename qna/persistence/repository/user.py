"""PostgreSQL implementation of User repository."""

from typing import Callable, Optional, Sequence

from sqlalchemy import case, func, select
from sqlalchemy.dialects.postgresql import insert

from qna.domain.model import User
from qna.domain.repository import UserRepository
from qna.domain.value import UserId, Username
from qna.persistence.mappers import row_to_user, user_to_dict
from qna.persistence.tables import answers_table, users_table

from .base import PostgresRepository


class PostgresUserRepository(PostgresRepository, UserRepository):
    """PostgreSQL implementation of UserRepository."""

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by username."""
        stmt = select(users_table).where(users_table.c.username == username.root)
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self._execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> User:
        """Save a user (insert, or update profile fields on conflict).

        Counters are left alone on update; they change only through the
        atomic methods below.
        """
        user_dict = user_to_dict(user)
        stmt = insert(users_table).values(**user_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={
                "username": stmt.excluded.username,
                "email": stmt.excluded.email,
                "avatar_url": stmt.excluded.avatar_url,
                "role": stmt.excluded.role,
                "updated_at": func.now(),
            },
        )
        await self._execute(stmt)
        await self.session.flush()
        return user

    async def adjust_reputation(self, user_id: UserId, delta: int) -> None:
        """Atomically add delta to reputation, clamped at 0."""
        new_value = users_table.c.reputation + delta
        stmt = (
            users_table.update()
            .where(users_table.c.id == user_id)
            .values(reputation=case((new_value > 0, new_value), else_=0))
        )
        await self._execute(stmt)
        await self.session.flush()

    async def refresh_answer_stats(
        self, user_id: UserId, badge_for: Callable[[int], str]
    ) -> Optional[int]:
        """Recount human-written answers and store the count with its badge.

        The recount and both updates share one savepoint. The refresh is best
        effort, and a failure of any of them, a statement timeout included,
        must not abort the request's transaction.
        """
        human_answers = (
            select(func.count())
            .select_from(answers_table)
            .where(
                answers_table.c.author_id == user_id,
                answers_table.c.is_ai_generated.is_(False),
            )
            .scalar_subquery()
        )
        async with self.session.begin_nested():
            result = await self._execute(
                users_table.update()
                .where(users_table.c.id == user_id)
                .values(answer_count=human_answers, updated_at=func.now())
                .returning(users_table.c.answer_count)
            )
            answer_count = result.scalar_one_or_none()
            if answer_count is None:
                return None

            await self._execute(
                users_table.update()
                .where(users_table.c.id == user_id)
                .values(badge=badge_for(answer_count))
            )
        return answer_count

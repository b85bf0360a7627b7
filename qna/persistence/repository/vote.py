"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, func, insert, select, update

from qna.domain.model import Vote
from qna.domain.repository import VoteRepository
from qna.domain.value import TargetType, UserId, VoteId, VoteValue
from qna.persistence.mappers import row_to_vote, vote_to_dict
from qna.persistence.tables import votes_table

from .base import PostgresRepository


class PostgresVoteRepository(PostgresRepository, VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        stmt = select(votes_table).where(votes_table.c.id == vote_id)
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_id: UUID,
        for_update: bool = False,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific target."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.target_type == target_type.value,
                votes_table.c.target_id == target_id,
            )
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user(self, user_id: UserId) -> List[Vote]:
        """Find all votes by a user."""
        stmt = select(votes_table).where(votes_table.c.user_id == user_id)
        result = await self._execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def find_by_target(
        self,
        target_type: TargetType,
        target_id: UUID,
    ) -> List[Vote]:
        """Find all votes on a target."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.target_type == target_type.value,
                votes_table.c.target_id == target_id,
            )
        )
        result = await self._execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote.

        The insert runs in a savepoint so a duplicate only rolls back itself
        and the caller can report the conflict.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        async with self.session.begin_nested():
            await self._execute(stmt)
        return vote

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote_id)
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def update_value(
        self, vote_id: VoteId, expected: VoteValue, value: VoteValue
    ) -> bool:
        """Compare-and-set the vote's value."""
        stmt = (
            update(votes_table)
            .where(
                and_(
                    votes_table.c.id == vote_id,
                    votes_table.c.value == int(expected),
                )
            )
            .values(value=int(value))
        )
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def sum_by_target(self, target_type: TargetType, target_id: UUID) -> int:
        """Sum of all vote values on a target."""
        stmt = select(func.coalesce(func.sum(votes_table.c.value), 0)).where(
            and_(
                votes_table.c.target_type == target_type.value,
                votes_table.c.target_id == target_id,
            )
        )
        result = await self._execute(stmt)
        return int(result.scalar() or 0)

    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple targets (batch query)."""
        if not target_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.target_type == target_type.value,
                votes_table.c.target_id.in_(target_ids),
            )
        )
        result = await self._execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

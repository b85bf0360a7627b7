"""In-memory vote repository for testing."""

from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from qna.domain.model.vote import Vote
from qna.domain.repository.vote import VoteRepository
from qna.domain.value import TargetType, UserId, VoteId, VoteValue

from .store import InMemoryStore


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._votes = store.votes

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        return self._votes.get(vote_id)

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_id: UUID,
        for_update: bool = False,
    ) -> Optional[Vote]:
        """Find a vote by user and target."""
        for vote in self._votes.values():
            if (
                vote.user_id == user_id
                and vote.target_type == target_type
                and vote.target_id == target_id
            ):
                return vote
        return None

    async def find_by_user(self, user_id: UserId) -> list[Vote]:
        """Find all votes by a user."""
        return [v for v in self._votes.values() if v.user_id == user_id]

    async def find_by_target(
        self,
        target_type: TargetType,
        target_id: UUID,
    ) -> list[Vote]:
        """Find all votes on a target."""
        return [
            v
            for v in self._votes.values()
            if v.target_type == target_type and v.target_id == target_id
        ]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        existing = await self.find_by_user_and_target(
            vote.user_id, vote.target_type, vote.target_id
        )
        if existing:
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes[vote.id] = vote
        return vote

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote by ID."""
        return self._votes.pop(vote_id, None) is not None

    async def update_value(
        self, vote_id: VoteId, expected: VoteValue, value: VoteValue
    ) -> bool:
        """Change the value if it still equals expected."""
        vote = self._votes.get(vote_id)
        if vote is None or vote.value != expected:
            return False
        self._votes[vote_id] = vote.model_copy(update={"value": value})
        return True

    async def sum_by_target(self, target_type: TargetType, target_id: UUID) -> int:
        """Sum of vote values on a target."""
        return sum(int(v.value) for v in await self.find_by_target(target_type, target_id))

    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> list[Vote]:
        """Find a user's votes on multiple targets (batch query)."""
        if not target_ids:
            return []

        wanted = set(target_ids)
        return [
            v
            for v in self._votes.values()
            if v.user_id == user_id
            and v.target_type == target_type
            and v.target_id in wanted
        ]

"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from qna.domain.model.vote import Vote
from qna.domain.value import TargetType, UserId, VoteId, VoteValue


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID.

        Args:
            vote_id: The vote's unique identifier

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_id: UUID,
        for_update: bool = False,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific target.

        Args:
            user_id: The user's ID
            target_type: Type of target (question or answer)
            target_id: ID of the target
            for_update: Lock the row until the end of the transaction

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> List[Vote]:
        """Find all votes by a user.

        Args:
            user_id: The user's ID

        Returns:
            List of votes by the user
        """
        pass

    @abstractmethod
    async def find_by_target(
        self,
        target_type: TargetType,
        target_id: UUID,
    ) -> List[Vote]:
        """Find all votes on a specific target.

        Args:
            target_type: Type of target (question or answer)
            target_id: ID of the target

        Returns:
            List of votes on the target
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a vote.

        This raises if a vote already exists for this user/target
        combination (unique constraint violation).

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote.

        Used when a user casts the same value twice (toggle-off).

        Args:
            vote_id: The vote ID to delete

        Returns:
            True if a vote was deleted, False if it was already gone
        """
        pass

    @abstractmethod
    async def update_value(
        self, vote_id: VoteId, expected: VoteValue, value: VoteValue
    ) -> bool:
        """Flip a vote, but only if it still holds the expected value.

        Args:
            vote_id: The vote to change
            expected: Value the caller read
            value: New value

        Returns:
            True if the vote was changed, False if it changed underneath us
        """
        pass

    @abstractmethod
    async def sum_by_target(self, target_type: TargetType, target_id: UUID) -> int:
        """Sum of all vote values on a target.

        This is what the target's vote_total must equal.
        """
        pass

    @abstractmethod
    async def find_by_user_and_targets(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple targets (batch query).

        Args:
            user_id: The user's ID
            target_type: Type of targets (question or answer)
            target_ids: List of target IDs to check

        Returns:
            List of votes by the user on the specified targets
        """
        pass

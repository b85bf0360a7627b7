"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from qna.domain.model.user import User
from qna.domain.value import UserId, Username


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: Username) -> Optional[User]:
        """Find a user by their username.

        Args:
            username: The user's username

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once (batch query).

        Args:
            user_ids: IDs to look up

        Returns:
            Users that exist, in no particular order
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update profile fields).

        Raises:
            IntegrityError: If the username is already taken
        """
        pass

    @abstractmethod
    async def adjust_reputation(self, user_id: UserId, delta: int) -> None:
        """Atomically add delta to reputation, never going below 0.

        Args:
            user_id: The user's ID
            delta: Signed reputation change
        """
        pass

    @abstractmethod
    async def refresh_answer_stats(
        self, user_id: UserId, badge_for: Callable[[int], str]
    ) -> Optional[int]:
        """Recount the user's human-written answers and store count and badge.

        Both happen as one unit that can fail on its own: a failure leaves
        the caller's unit of work usable.

        Args:
            user_id: The user's ID
            badge_for: Badge tier name for an answer count

        Returns:
            The new answer count, or None if the user does not exist
        """
        pass

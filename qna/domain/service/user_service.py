"""User domain service."""

from typing import Sequence

import logfire
from sqlalchemy.exc import IntegrityError

from qna.domain.error import ConflictError, NotFoundError
from qna.domain.model import User, resolve_badge
from qna.domain.repository import UserRepository
from qna.domain.value import UserId, Username

from .base import Service


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self,
        user_repository: UserRepository,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_by_username(self, username: Username) -> User:
        """Get user by username.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_username", username=username.root):
            user = await self.user_repository.find_by_username(username)
            if not user:
                logfire.warn("User not found", username=username.root)
                raise NotFoundError("User", username.root)
            return user

    async def get_many(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Load several users keyed by ID. Missing users are left out."""
        if not user_ids:
            return {}
        users = await self.user_repository.find_by_ids(list(set(user_ids)))
        return {user.id: user for user in users}

    async def register(self, user_id: UserId, username: Username, email: str) -> User:
        """Create the community profile for an authenticated identity.

        Args:
            user_id: ID issued by the identity provider
            username: Requested public username
            email: Contact email

        Returns:
            Created user

        Raises:
            ConflictError: If the profile exists or the username is taken
        """
        with logfire.span(
            "user_service.register", user_id=str(user_id), username=username.root
        ):
            if await self.user_repository.find_by_id(user_id):
                raise ConflictError("Profile already registered")
            if await self.user_repository.find_by_username(username):
                raise ConflictError(f"Username {username.root} is already taken")

            user = User(id=user_id, username=username, email=email)
            try:
                saved = await self.user_repository.save(user)
            except IntegrityError:
                logfire.warn("Concurrent registration", user_id=str(user_id))
                raise ConflictError(f"Username {username.root} is already taken")

            logfire.info("User registered", user_id=str(user_id))
            return saved

    async def adjust_reputation(self, user_id: UserId, delta: int) -> None:
        """Atomically change a user's reputation (never below 0).

        Args:
            user_id: User ID
            delta: Signed reputation change
        """
        if delta == 0:
            return
        with logfire.span(
            "user_service.adjust_reputation", user_id=str(user_id), delta=delta
        ):
            await self.user_repository.adjust_reputation(user_id, delta)

    async def refresh_answer_stats(self, user_id: UserId) -> User | None:
        """Recount a user's answers and store the resulting badge.

        Returns:
            The refreshed user, or None if the user does not exist
        """
        with logfire.span("user_service.refresh_answer_stats", user_id=str(user_id)):
            answer_count = await self.user_repository.refresh_answer_stats(
                user_id, lambda count: resolve_badge(count).name
            )
            if answer_count is None:
                return None

            logfire.info(
                "Answer stats refreshed",
                user_id=str(user_id),
                answer_count=answer_count,
            )
            return await self.user_repository.find_by_id(user_id)

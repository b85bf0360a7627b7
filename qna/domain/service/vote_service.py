"""Vote domain service."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from qna.config import PolicySettings, ReputationSettings
from qna.domain.error import ConflictError, NotFoundError, PermissionDeniedError
from qna.domain.model.vote import Vote
from qna.domain.repository import AnswerRepository, QuestionRepository, VoteRepository
from qna.domain.value import (
    AI_ASSISTANT_USER_ID,
    AnswerId,
    QuestionId,
    TargetType,
    UserId,
    VoteId,
    VoteValue,
)

from .base import Service
from .counter_service import CounterService
from .user_service import UserService

Compensation = Callable[[], Awaitable[Any]]


class VoteAction(str, Enum):
    """What a cast did to the ledger."""

    CAST = "cast"  # No previous vote, one was recorded
    REVOKED = "revoked"  # Same value cast again, vote removed
    FLIPPED = "flipped"  # Opposite value cast, vote changed


@dataclass
class VoteOutcome:
    """Authoritative result of a cast, read back from the store."""

    action: VoteAction
    delta: int
    vote_total: int
    user_vote: Optional[VoteValue]


class VoteService(Service):
    """Domain service for the vote ledger.

    The ledger row and the target's vote_total change together: both run in
    the request's transaction, and if a later step fails the earlier ones are
    compensated before the error propagates.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        counter_service: CounterService,
        user_service: UserService,
        policy: PolicySettings,
        reputation: ReputationSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            question_repository: Question repository (target lookup)
            answer_repository: Answer repository (target lookup)
            counter_service: Aggregate counter service
            user_service: User domain service (reputation)
            policy: Community policy settings
            reputation: Reputation points per vote
        """
        self.vote_repository = vote_repository
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.counter_service = counter_service
        self.user_service = user_service
        self.policy = policy
        self.reputation = reputation

    async def cast_vote(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_id: UUID,
        value: VoteValue,
    ) -> VoteOutcome:
        """Cast, revoke or flip a user's vote on a question or answer.

        - No existing vote: record it, delta = value
        - Same value again: delete it, delta = -value
        - Opposite value: flip it, delta = value - old value

        Args:
            user_id: Voting user
            target_type: Question or answer
            target_id: Target ID
            value: +1 or -1

        Returns:
            Vote outcome with the new total and the user's current vote

        Raises:
            NotFoundError: If the voter has no profile or the target does not exist
            PermissionDeniedError: If voting on own content is not allowed
            ConflictError: If a concurrent vote by the same user got there first
        """
        with logfire.span(
            "vote_service.cast_vote",
            user_id=str(user_id),
            target_type=target_type.value,
            target_id=str(target_id),
            value=int(value),
        ):
            value = VoteValue(value)
            # Votes reference the voter's profile
            await self.user_service.get_by_id(user_id)
            author_id = await self._find_target_author(target_type, target_id)

            if author_id == user_id and not self.policy.allow_self_voting:
                logfire.warn(
                    "Self-vote rejected",
                    user_id=str(user_id),
                    target_id=str(target_id),
                )
                raise PermissionDeniedError(
                    "vote on", target_type.value, str(target_id), str(user_id)
                )

            compensations: list[Compensation] = []
            try:
                action, delta, user_vote = await self._update_ledger(
                    user_id, target_type, target_id, value, compensations
                )

                total = await self.counter_service.apply_vote_delta(
                    target_type, target_id, delta
                )
                compensations.append(
                    lambda: self.counter_service.apply_vote_delta(
                        target_type, target_id, -delta
                    )
                )

                points = (
                    self.reputation.question_vote
                    if target_type == TargetType.QUESTION
                    else self.reputation.answer_vote
                )
                # The AI assistant collects no reputation
                if author_id != AI_ASSISTANT_USER_ID:
                    await self.user_service.adjust_reputation(author_id, delta * points)
            except Exception:
                await self._compensate(compensations)
                raise

            logfire.info(
                "Vote applied",
                action=action.value,
                delta=delta,
                vote_total=total,
                target_id=str(target_id),
            )
            return VoteOutcome(
                action=action, delta=delta, vote_total=total, user_vote=user_vote
            )

    async def _update_ledger(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_id: UUID,
        value: VoteValue,
        compensations: list[Compensation],
    ) -> tuple[VoteAction, int, Optional[VoteValue]]:
        """Apply the ledger transition and register how to undo it."""
        existing = await self.vote_repository.find_by_user_and_target(
            user_id, target_type, target_id, for_update=True
        )

        if existing is None:
            vote = Vote(
                id=VoteId(uuid4()),
                user_id=user_id,
                target_type=target_type,
                target_id=target_id,
                value=value,
            )
            try:
                await self.vote_repository.save(vote)
            except IntegrityError:
                logfire.warn(
                    "Duplicate vote insert", user_id=str(user_id), target_id=str(target_id)
                )
                raise ConflictError("A vote on this target was recorded concurrently")
            compensations.append(lambda: self.vote_repository.delete(vote.id))
            return VoteAction.CAST, int(value), value

        if existing.value == value:
            if not await self.vote_repository.delete(existing.id):
                raise ConflictError("The vote was removed concurrently")
            compensations.append(lambda: self.vote_repository.save(existing))
            return VoteAction.REVOKED, -int(value), None

        if not await self.vote_repository.update_value(existing.id, existing.value, value):
            raise ConflictError("The vote was changed concurrently")
        compensations.append(
            lambda: self.vote_repository.update_value(existing.id, value, existing.value)
        )
        return VoteAction.FLIPPED, int(value) - int(existing.value), value

    async def _compensate(self, compensations: list[Compensation]) -> None:
        """Undo completed steps, most recent first."""
        for undo in reversed(compensations):
            try:
                await undo()
            except Exception as e:
                # The surrounding transaction rollback still covers this step
                logfire.error("Vote compensation failed", error=str(e))

    async def _find_target_author(self, target_type: TargetType, target_id: UUID) -> UserId:
        if target_type == TargetType.QUESTION:
            question = await self.question_repository.find_by_id(QuestionId(target_id))
            if question:
                return question.author_id
        else:  # TargetType.ANSWER
            answer = await self.answer_repository.find_by_id(AnswerId(target_id))
            if answer:
                return answer.author_id

        logfire.warn(
            "Vote on non-existent target",
            target_type=target_type.value,
            target_id=str(target_id),
        )
        raise NotFoundError(target_type.value.capitalize(), str(target_id))

    async def get_user_votes(
        self,
        user_id: UserId,
        target_type: TargetType,
        target_ids: Sequence[UUID],
    ) -> dict[UUID, VoteValue]:
        """Current votes of a user on several targets.

        Args:
            user_id: User ID
            target_type: Type of the targets
            target_ids: Targets to check

        Returns:
            Mapping of target ID to vote value; targets without a vote are absent
        """
        if not target_ids:
            return {}

        votes = await self.vote_repository.find_by_user_and_targets(
            user_id=user_id,
            target_type=target_type,
            target_ids=target_ids,
        )
        return {vote.target_id: vote.value for vote in votes}

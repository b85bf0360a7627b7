"""Aggregate counter domain service."""

from uuid import UUID

import logfire

from qna.domain.error import NotFoundError
from qna.domain.repository import AnswerRepository, QuestionRepository
from qna.domain.value import AnswerId, QuestionId, TargetType

from .base import Service


class CounterService(Service):
    """Applies vote deltas to the denormalized vote totals.

    Totals have no floor or ceiling. Updates go through the repositories'
    atomic increment so concurrent voters never overwrite each other.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
    ) -> None:
        self.question_repository = question_repository
        self.answer_repository = answer_repository

    async def apply_vote_delta(
        self, target_type: TargetType, target_id: UUID, delta: int
    ) -> int:
        """Add delta to the target's vote total.

        Args:
            target_type: Question or answer
            target_id: Target ID
            delta: Signed change

        Returns:
            The new vote total

        Raises:
            NotFoundError: If the target does not exist
        """
        with logfire.span(
            "counter_service.apply_vote_delta",
            target_type=target_type.value,
            target_id=str(target_id),
            delta=delta,
        ):
            if target_type == TargetType.QUESTION:
                total = await self.question_repository.apply_vote_delta(
                    QuestionId(target_id), delta
                )
            else:  # TargetType.ANSWER
                total = await self.answer_repository.apply_vote_delta(
                    AnswerId(target_id), delta
                )

            if total is None:
                logfire.warn(
                    "Vote delta on missing target",
                    target_type=target_type.value,
                    target_id=str(target_id),
                )
                raise NotFoundError(target_type.value.capitalize(), str(target_id))

            logfire.info("Vote total updated", target_id=str(target_id), total=total)
            return total

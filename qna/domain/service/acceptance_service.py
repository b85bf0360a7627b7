"""Answer acceptance domain service."""

from dataclasses import dataclass
from typing import Optional

import logfire

from qna.config import PolicySettings, ReputationSettings
from qna.domain.error import (
    BusinessRuleViolationError,
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
)
from qna.domain.model import Answer, Question
from qna.domain.repository import AnswerRepository, QuestionRepository
from qna.domain.value import AI_ASSISTANT_USER_ID, AnswerId, QuestionId, UserId

from .base import Service
from .user_service import UserService


@dataclass
class AcceptanceOutcome:
    """State of a question's acceptance after a request."""

    question_id: QuestionId
    accepted_answer_id: Optional[AnswerId]
    previous_answer_id: Optional[AnswerId]
    changed: bool


class AcceptanceService(Service):
    """Keeps ``Question.accepted_answer_id`` and ``Answer.is_accepted`` in step.

    State machine per question: NoAccepted -> Accepted(a) -> Accepted(b) or
    back to NoAccepted. Only the asker drives transitions.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        user_service: UserService,
        policy: PolicySettings,
        reputation: ReputationSettings,
    ) -> None:
        """Initialize acceptance service.

        Args:
            question_repository: Question repository
            answer_repository: Answer repository
            user_service: User domain service (reputation)
            policy: Community policy settings
            reputation: Reputation settings
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.user_service = user_service
        self.policy = policy
        self.reputation = reputation

    async def accept_answer(
        self,
        question_id: QuestionId,
        answer_id: AnswerId,
        requesting_user_id: UserId,
    ) -> tuple[AcceptanceOutcome, Answer]:
        """Mark an answer as the accepted one.

        Accepting a different answer switches acceptance. Accepting the
        already accepted answer changes nothing.

        Args:
            question_id: Question ID
            answer_id: Answer to accept
            requesting_user_id: Caller, must be the asker

        Returns:
            Outcome and the accepted answer

        Raises:
            NotFoundError: If question not found
            PermissionDeniedError: If the caller did not ask the question
            InvalidArgumentError: If the answer is missing or belongs elsewhere
            BusinessRuleViolationError: If the answer is AI-generated and
                policy forbids accepting those
        """
        with logfire.span(
            "acceptance_service.accept_answer",
            question_id=str(question_id),
            answer_id=str(answer_id),
            user_id=str(requesting_user_id),
        ):
            question = await self._load_owned_question(question_id, requesting_user_id)

            answer = await self.answer_repository.find_by_id(answer_id)
            if not answer or answer.question_id != question_id:
                logfire.warn(
                    "Accepting answer of another question",
                    question_id=str(question_id),
                    answer_id=str(answer_id),
                )
                raise InvalidArgumentError(
                    f"Answer {answer_id} does not belong to question {question_id}"
                )

            if answer.is_ai_generated and not self.policy.allow_accepting_ai_answers:
                raise BusinessRuleViolationError(
                    "AI-generated answers cannot be accepted"
                )

            previous_id = question.accepted_answer_id
            if previous_id == answer_id:
                logfire.info("Answer already accepted", answer_id=str(answer_id))
                return (
                    AcceptanceOutcome(question_id, answer_id, previous_id, False),
                    answer,
                )

            await self.answer_repository.mark_accepted(question_id, answer_id)
            await self.question_repository.set_accepted_answer(question_id, answer_id)

            if previous_id is not None:
                previous = await self.answer_repository.find_by_id(previous_id)
                if previous:
                    await self._award(question, previous, -self.reputation.accepted_answer)
            await self._award(question, answer, self.reputation.accepted_answer)

            logfire.info(
                "Answer accepted",
                question_id=str(question_id),
                answer_id=str(answer_id),
                previous_answer_id=str(previous_id) if previous_id else None,
            )
            return (
                AcceptanceOutcome(question_id, answer_id, previous_id, True),
                answer.model_copy(update={"is_accepted": True}),
            )

    async def unaccept_answer(
        self, question_id: QuestionId, requesting_user_id: UserId
    ) -> AcceptanceOutcome:
        """Clear the accepted answer of a question.

        Raises:
            NotFoundError: If question not found
            PermissionDeniedError: If the caller did not ask the question
        """
        with logfire.span(
            "acceptance_service.unaccept_answer",
            question_id=str(question_id),
            user_id=str(requesting_user_id),
        ):
            question = await self._load_owned_question(question_id, requesting_user_id)

            previous_id = question.accepted_answer_id
            if previous_id is None:
                return AcceptanceOutcome(question_id, None, None, False)

            await self.answer_repository.mark_accepted(question_id, None)
            await self.question_repository.set_accepted_answer(question_id, None)

            previous = await self.answer_repository.find_by_id(previous_id)
            if previous:
                await self._award(question, previous, -self.reputation.accepted_answer)

            logfire.info(
                "Answer unaccepted",
                question_id=str(question_id),
                answer_id=str(previous_id),
            )
            return AcceptanceOutcome(question_id, None, previous_id, True)

    async def _load_owned_question(
        self, question_id: QuestionId, user_id: UserId
    ) -> Question:
        # Row lock serializes concurrent accepts on the same question
        question = await self.question_repository.find_by_id(question_id, for_update=True)
        if not question:
            logfire.warn("Question not found", question_id=str(question_id))
            raise NotFoundError("Question", str(question_id))

        if question.author_id != user_id:
            logfire.warn(
                "Acceptance by non-asker",
                question_id=str(question_id),
                user_id=str(user_id),
            )
            raise PermissionDeniedError(
                "accept answers on", "question", str(question_id), str(user_id)
            )
        return question

    async def _award(self, question: Question, answer: Answer, points: int) -> None:
        # No reputation for accepting your own answer or for the AI assistant
        if answer.author_id in (question.author_id, AI_ASSISTANT_USER_ID):
            return
        await self.user_service.adjust_reputation(answer.author_id, points)

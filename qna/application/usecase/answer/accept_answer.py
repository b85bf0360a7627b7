"""Accept answer use case."""

from uuid import UUID

from pydantic import BaseModel

from qna.domain.service import (
    AcceptanceOutcome,
    AcceptanceService,
    NotificationService,
    QuestionService,
)
from qna.domain.value import AnswerId, QuestionId, UserId


class AcceptAnswerRequest(BaseModel):
    """Accept answer request."""

    question_id: str
    answer_id: str
    user_id: str  # User ID from authenticated user


class AcceptanceResponse(BaseModel):
    """Acceptance state after the request."""

    question_id: str
    accepted_answer_id: str | None
    previous_answer_id: str | None
    changed: bool

    @classmethod
    def from_outcome(cls, outcome: AcceptanceOutcome) -> "AcceptanceResponse":
        return cls(
            question_id=str(outcome.question_id),
            accepted_answer_id=(
                str(outcome.accepted_answer_id) if outcome.accepted_answer_id else None
            ),
            previous_answer_id=(
                str(outcome.previous_answer_id) if outcome.previous_answer_id else None
            ),
            changed=outcome.changed,
        )


class AcceptAnswerUseCase:
    """Use case for the asker accepting an answer."""

    def __init__(
        self,
        acceptance_service: AcceptanceService,
        question_service: QuestionService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize accept answer use case.

        Args:
            acceptance_service: Acceptance domain service
            question_service: Question domain service
            notification_service: Notification domain service
        """
        self.acceptance_service = acceptance_service
        self.question_service = question_service
        self.notification_service = notification_service

    async def execute(self, request: AcceptAnswerRequest) -> AcceptanceResponse:
        """Execute accept answer flow.

        Raises:
            NotFoundError: If question not found
            PermissionDeniedError: If the caller did not ask the question
            InvalidArgumentError: If the answer belongs to another question
            BusinessRuleViolationError: If the answer may not be accepted
        """
        outcome, answer = await self.acceptance_service.accept_answer(
            question_id=QuestionId(UUID(request.question_id)),
            answer_id=AnswerId(UUID(request.answer_id)),
            requesting_user_id=UserId(UUID(request.user_id)),
        )

        if outcome.changed:
            question = await self.question_service.get_question(outcome.question_id)
            await self.notification_service.notify_answer_accepted(question, answer)

        return AcceptanceResponse.from_outcome(outcome)

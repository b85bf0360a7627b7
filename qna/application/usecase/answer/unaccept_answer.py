"""Unaccept answer use case."""

from uuid import UUID

from pydantic import BaseModel

from qna.domain.service import AcceptanceService
from qna.domain.value import QuestionId, UserId

from .accept_answer import AcceptanceResponse


class UnacceptAnswerRequest(BaseModel):
    """Unaccept answer request."""

    question_id: str
    user_id: str  # User ID from authenticated user


class UnacceptAnswerUseCase:
    """Use case for the asker withdrawing an acceptance."""

    def __init__(self, acceptance_service: AcceptanceService) -> None:
        self.acceptance_service = acceptance_service

    async def execute(self, request: UnacceptAnswerRequest) -> AcceptanceResponse:
        """Execute unaccept flow.

        Raises:
            NotFoundError: If question not found
            PermissionDeniedError: If the caller did not ask the question
        """
        outcome = await self.acceptance_service.unaccept_answer(
            question_id=QuestionId(UUID(request.question_id)),
            requesting_user_id=UserId(UUID(request.user_id)),
        )
        return AcceptanceResponse.from_outcome(outcome)

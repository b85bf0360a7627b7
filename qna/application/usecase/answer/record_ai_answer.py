"""Record AI answer use case."""

from uuid import UUID

from pydantic import BaseModel

from qna.domain.service import AnswerService, NotificationService, UserService
from qna.domain.value import AI_ASSISTANT_USER_ID, QuestionId, UserId

from .post_answer import AnswerResponse

AI_ANSWERER_NAME = "AI Assistant"


class RecordAIAnswerRequest(BaseModel):
    """Record AI answer request."""

    question_id: str
    requested_by: str  # User ID of the caller who generated the answer
    content: str  # Text returned by the completion provider


class RecordAIAnswerUseCase:
    """Use case for storing a generated answer under the AI assistant."""

    def __init__(
        self,
        answer_service: AnswerService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize record AI answer use case.

        Args:
            answer_service: Answer domain service
            user_service: User domain service
            notification_service: Notification domain service
        """
        self.answer_service = answer_service
        self.user_service = user_service
        self.notification_service = notification_service

    async def execute(self, request: RecordAIAnswerRequest) -> AnswerResponse:
        """Execute record AI answer flow.

        The answer is authored by the reserved AI assistant user and does not
        count towards anyone's badge.

        Raises:
            NotFoundError: If the caller or the question does not exist
            ValidationError: If content is empty
        """
        await self.user_service.get_by_id(UserId(UUID(request.requested_by)))

        question, answer = await self.answer_service.post_answer(
            question_id=QuestionId(UUID(request.question_id)),
            author_id=AI_ASSISTANT_USER_ID,
            content=request.content,
            is_ai_generated=True,
        )

        await self.notification_service.notify_answer_posted(
            question, answer, AI_ANSWERER_NAME
        )

        return AnswerResponse.from_answer(answer)

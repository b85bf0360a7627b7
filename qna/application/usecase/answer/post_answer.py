"""Post answer use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from qna.domain.model import Answer
from qna.domain.service import (
    AnswerService,
    NotificationService,
    UserService,
)
from qna.domain.value import QuestionId, UserId

from ..base import BaseUseCase


class PostAnswerRequest(BaseModel):
    """Post answer request."""

    question_id: str
    author_id: str  # User ID from authenticated user
    content: str


class AnswerResponse(BaseModel):
    """An answer as stored."""

    answer_id: str
    question_id: str
    content: str
    author_id: str
    vote_total: int
    is_accepted: bool
    is_ai_generated: bool
    created_at: datetime

    @classmethod
    def from_answer(cls, answer: Answer) -> "AnswerResponse":
        return cls(
            answer_id=str(answer.id),
            question_id=str(answer.question_id),
            content=answer.content,
            author_id=str(answer.author_id),
            vote_total=answer.vote_total,
            is_accepted=answer.is_accepted,
            is_ai_generated=answer.is_ai_generated,
            created_at=answer.created_at,
        )


class PostAnswerUseCase(BaseUseCase):
    """Use case for answering a question."""

    def __init__(
        self,
        answer_service: AnswerService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize post answer use case.

        Args:
            answer_service: Answer domain service
            user_service: User domain service
            notification_service: Notification domain service
        """
        self.answer_service = answer_service
        self.user_service = user_service
        self.notification_service = notification_service

    async def execute(self, request: PostAnswerRequest) -> AnswerResponse:
        """Execute post answer flow.

        Steps:
        1. Verify the answerer has a profile
        2. Store the answer and bump the question's answer count
        3. Notify the asker (never fails the request)
        4. Refresh the answerer's answer count and badge (best effort)

        Raises:
            NotFoundError: If the answerer or the question does not exist
            ValidationError: If content is empty
        """
        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))

        question, answer = await self.answer_service.post_answer(
            question_id=QuestionId(UUID(request.question_id)),
            author_id=author.id,
            content=request.content,
        )

        await self.notification_service.notify_answer_posted(
            question, answer, author.username.root
        )

        try:
            await self.user_service.refresh_answer_stats(author.id)
        except Exception as e:
            # Badge may lag until the next answer
            logfire.error(
                "Failed to refresh answer stats", user_id=str(author.id), error=str(e)
            )

        return AnswerResponse.from_answer(answer)

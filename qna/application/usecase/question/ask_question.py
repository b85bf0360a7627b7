"""Ask question use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from qna.domain.service import QuestionService, UserService
from qna.domain.value import UserId

from ..base import BaseUseCase


class AskQuestionRequest(BaseModel):
    """Ask question request."""

    author_id: str  # User ID from authenticated user
    title: str
    description: str
    tags: list[str] = Field(default_factory=list)


class QuestionResponse(BaseModel):
    """A question as stored."""

    question_id: str
    title: str
    description: str
    tags: list[str]
    author_id: str
    vote_total: int
    view_count: int
    answer_count: int
    accepted_answer_id: str | None
    created_at: datetime
    updated_at: datetime


class AskQuestionUseCase(BaseUseCase):
    """Use case for asking a new question."""

    def __init__(
        self,
        question_service: QuestionService,
        user_service: UserService,
    ) -> None:
        """Initialize ask question use case.

        Args:
            question_service: Question domain service
            user_service: User domain service
        """
        self.question_service = question_service
        self.user_service = user_service

    async def execute(self, request: AskQuestionRequest) -> QuestionResponse:
        """Execute ask question flow.

        Steps:
        1. Verify the asker has a profile
        2. Validate and store the question

        Raises:
            NotFoundError: If the asker has no profile
            ValidationError: If title, description or tags are invalid
        """
        author = await self.user_service.get_by_id(UserId(UUID(request.author_id)))

        question = await self.question_service.ask_question(
            author_id=author.id,
            title=request.title,
            description=request.description,
            tags=request.tags,
        )

        return QuestionResponse(
            question_id=str(question.id),
            title=question.title,
            description=question.description,
            tags=question.tag_names,
            author_id=str(question.author_id),
            vote_total=question.vote_total,
            view_count=question.view_count,
            answer_count=question.answer_count,
            accepted_answer_id=(
                str(question.accepted_answer_id) if question.accepted_answer_id else None
            ),
            created_at=question.created_at,
            updated_at=question.updated_at,
        )

"""Get question detail use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from qna.domain.service import (
    AnswerService,
    QuestionService,
    UserService,
    VoteService,
)
from qna.domain.value import QuestionId, TargetType, UserId


class GetQuestionRequest(BaseModel):
    """Get question request."""

    question_id: str
    user_id: str | None = None  # Current user ID (if authenticated)


class AnswerItem(BaseModel):
    """Answer shown under a question."""

    answer_id: str
    content: str
    author_id: str
    author_username: str | None
    author_badge: str | None
    vote_total: int
    is_accepted: bool
    is_ai_generated: bool
    created_at: datetime
    user_vote: int | None


class GetQuestionResponse(BaseModel):
    """Question detail response."""

    question_id: str
    title: str
    description: str
    tags: list[str]
    author_id: str
    author_username: str | None
    vote_total: int
    view_count: int
    answer_count: int
    accepted_answer_id: str | None
    created_at: datetime
    updated_at: datetime
    user_vote: int | None
    answers: list[AnswerItem]


class GetQuestionUseCase:
    """Use case for opening a question's detail page."""

    def __init__(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        user_service: UserService,
        vote_service: VoteService,
    ) -> None:
        """Initialize get question use case.

        Args:
            question_service: Question domain service
            answer_service: Answer domain service
            user_service: User domain service
            vote_service: Vote domain service
        """
        self.question_service = question_service
        self.answer_service = answer_service
        self.user_service = user_service
        self.vote_service = vote_service

    async def execute(self, request: GetQuestionRequest) -> GetQuestionResponse:
        """Execute get question flow.

        Steps:
        1. Count the view (every open counts)
        2. Load the question and its answers
        3. Attach author names and the caller's votes

        Raises:
            NotFoundError: If question not found
        """
        question_id = QuestionId(UUID(request.question_id))

        await self.question_service.increment_views(question_id)
        question = await self.question_service.get_question(question_id)
        answers = await self.answer_service.list_for_question(question_id)

        authors = await self.user_service.get_many(
            [question.author_id] + [answer.author_id for answer in answers]
        )

        question_vote = None
        answer_votes = {}
        if request.user_id:
            user_id = UserId(UUID(request.user_id))
            question_votes = await self.vote_service.get_user_votes(
                user_id, TargetType.QUESTION, [question.id]
            )
            question_vote = question_votes.get(question.id)
            answer_votes = await self.vote_service.get_user_votes(
                user_id, TargetType.ANSWER, [answer.id for answer in answers]
            )

        answer_items = []
        for answer in answers:
            author = authors.get(answer.author_id)
            vote = answer_votes.get(answer.id)
            answer_items.append(
                AnswerItem(
                    answer_id=str(answer.id),
                    content=answer.content,
                    author_id=str(answer.author_id),
                    author_username=author.username.root if author else None,
                    author_badge=author.badge if author else None,
                    vote_total=answer.vote_total,
                    is_accepted=answer.is_accepted,
                    is_ai_generated=answer.is_ai_generated,
                    created_at=answer.created_at,
                    user_vote=int(vote) if vote is not None else None,
                )
            )

        asker = authors.get(question.author_id)
        return GetQuestionResponse(
            question_id=str(question.id),
            title=question.title,
            description=question.description,
            tags=question.tag_names,
            author_id=str(question.author_id),
            author_username=asker.username.root if asker else None,
            vote_total=question.vote_total,
            view_count=question.view_count,
            answer_count=question.answer_count,
            accepted_answer_id=(
                str(question.accepted_answer_id) if question.accepted_answer_id else None
            ),
            created_at=question.created_at,
            updated_at=question.updated_at,
            user_vote=int(question_vote) if question_vote is not None else None,
            answers=answer_items,
        )

"""List questions use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from qna.domain.error import ValidationError
from qna.domain.repository import QuestionFilter, QuestionSortOrder
from qna.domain.service import QuestionService, UserService, VoteService
from qna.domain.service.question_service import first_error_message
from qna.domain.value import TagName, TargetType, UserId


class QuestionListItem(BaseModel):
    """Question list item in response."""

    question_id: str
    title: str
    tags: list[str]
    author_id: str
    author_username: str | None
    vote_total: int
    view_count: int
    answer_count: int
    has_accepted_answer: bool
    created_at: datetime
    user_vote: int | None  # Caller's vote, if any


class ListQuestionsRequest(BaseModel):
    """List questions request."""

    sort: QuestionSortOrder = QuestionSortOrder.NEWEST
    filter_by: QuestionFilter = QuestionFilter.ALL
    tags: list[str] = Field(default_factory=list)  # Any of these tags
    limit: int = Field(default=30, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListQuestionsResponse(BaseModel):
    """List questions response."""

    questions: list[QuestionListItem]
    total: int
    limit: int
    offset: int


class ListQuestionsUseCase:
    """Use case for the question feed."""

    def __init__(
        self,
        question_service: QuestionService,
        user_service: UserService,
        vote_service: VoteService,
    ) -> None:
        """Initialize list questions use case.

        Args:
            question_service: Question domain service
            user_service: User domain service (author names)
            vote_service: Vote domain service (caller's votes)
        """
        self.question_service = question_service
        self.user_service = user_service
        self.vote_service = vote_service

    async def execute(self, request: ListQuestionsRequest) -> ListQuestionsResponse:
        """Execute list questions flow.

        Raises:
            ValidationError: If a tag filter is malformed
        """
        try:
            tags = [TagName(tag) for tag in request.tags if tag.strip()]
        except PydanticValidationError as e:
            raise ValidationError(first_error_message(e))

        questions, total = await self.question_service.list_questions(
            sort=request.sort,
            filter_by=request.filter_by,
            tags=tags,
            limit=request.limit,
            offset=request.offset,
        )

        authors = await self.user_service.get_many([q.author_id for q in questions])

        # Batch query to avoid N+1
        user_votes = {}
        if request.user_id and questions:
            user_votes = await self.vote_service.get_user_votes(
                user_id=UserId(UUID(request.user_id)),
                target_type=TargetType.QUESTION,
                target_ids=[q.id for q in questions],
            )

        items = []
        for question in questions:
            author = authors.get(question.author_id)
            vote = user_votes.get(question.id)
            items.append(
                QuestionListItem(
                    question_id=str(question.id),
                    title=question.title,
                    tags=question.tag_names,
                    author_id=str(question.author_id),
                    author_username=author.username.root if author else None,
                    vote_total=question.vote_total,
                    view_count=question.view_count,
                    answer_count=question.answer_count,
                    has_accepted_answer=question.accepted_answer_id is not None,
                    created_at=question.created_at,
                    user_vote=int(vote) if vote is not None else None,
                )
            )

        logfire.info("Question feed built", count=len(items), total=total)

        return ListQuestionsResponse(
            questions=items,
            total=total,
            limit=request.limit,
            offset=request.offset,
        )

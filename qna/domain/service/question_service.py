"""Question domain service."""

from typing import Sequence
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from qna.domain.error import NotFoundError, ValidationError
from qna.domain.model import Question
from qna.domain.repository import (
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
)
from qna.domain.value import QuestionId, TagName, UserId

from .base import Service


def first_error_message(error: PydanticValidationError) -> str:
    """Human-readable message of the first pydantic error."""
    message = error.errors()[0]["msg"]
    return message.removeprefix("Value error, ")


class QuestionService(Service):
    """Domain service for question operations."""

    def __init__(self, question_repository: QuestionRepository) -> None:
        """Initialize question service.

        Args:
            question_repository: Question repository
        """
        self.question_repository = question_repository

    async def ask_question(
        self,
        author_id: UserId,
        title: str,
        description: str,
        tags: Sequence[str],
    ) -> Question:
        """Create a question.

        Args:
            author_id: Asking user
            title: At least 10 characters once trimmed
            description: At least 20 characters once trimmed
            tags: 1-5 tag names (normalized to lowercase)

        Returns:
            Saved question

        Raises:
            ValidationError: If title, description or tags are invalid
        """
        with logfire.span(
            "question_service.ask_question", author_id=str(author_id), tags=list(tags)
        ):
            try:
                question = Question(
                    id=QuestionId(uuid4()),
                    title=title.strip(),
                    description=description,
                    tags=[TagName(tag) for tag in tags],
                    author_id=author_id,
                )
            except PydanticValidationError as e:
                message = first_error_message(e)
                logfire.warn("Invalid question", error=message)
                raise ValidationError(message)

            saved = await self.question_repository.save(question)
            logfire.info("Question created", question_id=str(saved.id))
            return saved

    async def get_question(self, question_id: QuestionId) -> Question:
        """Get a question by ID.

        Raises:
            NotFoundError: If question not found
        """
        with logfire.span("question_service.get_question", question_id=str(question_id)):
            question = await self.question_repository.find_by_id(question_id)
            if not question:
                logfire.warn("Question not found", question_id=str(question_id))
                raise NotFoundError("Question", str(question_id))
            return question

    async def list_questions(
        self,
        sort: QuestionSortOrder,
        filter_by: QuestionFilter,
        tags: Sequence[TagName],
        limit: int,
        offset: int,
    ) -> tuple[list[Question], int]:
        """List one page of questions and the total matching count."""
        with logfire.span(
            "question_service.list_questions",
            sort=sort.value,
            filter_by=filter_by.value,
            tags=[tag.root for tag in tags],
            limit=limit,
            offset=offset,
        ):
            total = await self.question_repository.count(filter_by=filter_by, tags=tags)
            questions = await self.question_repository.find_all(
                sort=sort,
                filter_by=filter_by,
                tags=tags,
                limit=limit,
                offset=offset,
            )
            logfire.info("Questions listed", count=len(questions), total=total)
            return questions, total

    async def increment_views(self, question_id: QuestionId) -> int:
        """Count one more view of a question.

        Every call counts; there is no per-viewer deduplication.

        Returns:
            The new view count

        Raises:
            NotFoundError: If question not found
        """
        with logfire.span(
            "question_service.increment_views", question_id=str(question_id)
        ):
            views = await self.question_repository.increment_views(question_id)
            if views is None:
                raise NotFoundError("Question", str(question_id))
            return views

    async def count_by_author(self, author_id: UserId) -> int:
        """Number of questions a user has asked."""
        return await self.question_repository.count_by_author(author_id)

"""Answer domain service."""

from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from qna.domain.error import NotFoundError, ValidationError
from qna.domain.model import Answer, Question
from qna.domain.repository import AnswerRepository, QuestionRepository
from qna.domain.value import AnswerId, QuestionId, UserId

from .base import Service
from .question_service import first_error_message


class AnswerService(Service):
    """Domain service for answer operations."""

    def __init__(
        self,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
    ) -> None:
        """Initialize answer service.

        Args:
            answer_repository: Answer repository
            question_repository: Question repository
        """
        self.answer_repository = answer_repository
        self.question_repository = question_repository

    async def post_answer(
        self,
        question_id: QuestionId,
        author_id: UserId,
        content: str,
        is_ai_generated: bool = False,
    ) -> tuple[Question, Answer]:
        """Add an answer to a question.

        Args:
            question_id: Question being answered
            author_id: Answering user (the AI assistant for generated answers)
            content: Answer body (rich text)
            is_ai_generated: Whether the content came from the AI provider

        Returns:
            The answered question and the saved answer

        Raises:
            NotFoundError: If question not found
            ValidationError: If content is empty
        """
        with logfire.span(
            "answer_service.post_answer",
            question_id=str(question_id),
            author_id=str(author_id),
            is_ai_generated=is_ai_generated,
        ):
            question = await self.question_repository.find_by_id(question_id)
            if not question:
                logfire.warn("Answer on non-existent question", question_id=str(question_id))
                raise NotFoundError("Question", str(question_id))

            try:
                answer = Answer(
                    id=AnswerId(uuid4()),
                    question_id=question_id,
                    author_id=author_id,
                    content=content,
                    is_ai_generated=is_ai_generated,
                )
            except PydanticValidationError as e:
                raise ValidationError(first_error_message(e))

            saved = await self.answer_repository.save(answer)
            await self.question_repository.increment_answer_count(question_id)

            logfire.info(
                "Answer posted", question_id=str(question_id), answer_id=str(saved.id)
            )
            return question, saved

    async def get_answer(self, answer_id: AnswerId) -> Answer:
        """Get an answer by ID.

        Raises:
            NotFoundError: If answer not found
        """
        answer = await self.answer_repository.find_by_id(answer_id)
        if not answer:
            raise NotFoundError("Answer", str(answer_id))
        return answer

    async def list_for_question(self, question_id: QuestionId) -> list[Answer]:
        """All answers of a question, accepted first, then by votes."""
        return await self.answer_repository.find_by_question(question_id)

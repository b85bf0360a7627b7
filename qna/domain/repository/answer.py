"""Answer repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from qna.domain.model.answer import Answer
from qna.domain.value import AnswerId, QuestionId


class AnswerRepository(ABC):
    """Repository for Answer entity."""

    @abstractmethod
    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID.

        Args:
            answer_id: The answer's unique identifier

        Returns:
            The answer if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_question(self, question_id: QuestionId) -> List[Answer]:
        """Find all answers under a question.

        Returns:
            Answers ordered accepted first, then by votes, then oldest first
        """
        pass

    @abstractmethod
    async def save(self, answer: Answer) -> Answer:
        """Insert a new answer."""
        pass

    @abstractmethod
    async def apply_vote_delta(self, answer_id: AnswerId, delta: int) -> Optional[int]:
        """Atomically add delta to vote_total.

        Returns:
            The new vote_total, or None if the answer does not exist
        """
        pass

    @abstractmethod
    async def mark_accepted(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> None:
        """Set is_accepted on exactly the given answer of a question.

        Every other answer of the question is cleared in the same statement.
        Passing None clears all of them.

        Args:
            question_id: Question whose answers are updated
            answer_id: The answer to flag, or None
        """
        pass

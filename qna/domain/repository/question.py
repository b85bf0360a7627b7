"""Question repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Sequence

from qna.domain.model.question import Question
from qna.domain.value import AnswerId, QuestionId, TagName, UserId


class QuestionSortOrder(str, Enum):
    """Sort order for question listings."""

    NEWEST = "newest"  # Sort by created_at DESC
    VOTES = "votes"  # Sort by vote_total DESC
    VIEWS = "views"  # Sort by view_count DESC


class QuestionFilter(str, Enum):
    """Which questions to include in a listing."""

    ALL = "all"
    ANSWERED = "answered"  # At least one answer
    UNANSWERED = "unanswered"  # No answers yet


class QuestionRepository(ABC):
    """Repository for Question aggregate.

    Counter columns are only changed through the atomic increment methods so
    that concurrent writers never lose updates.
    """

    @abstractmethod
    async def find_by_id(
        self, question_id: QuestionId, for_update: bool = False
    ) -> Optional[Question]:
        """Find a question by ID.

        Args:
            question_id: The question's unique identifier
            for_update: Lock the row until the end of the transaction

        Returns:
            The question if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        filter_by: QuestionFilter = QuestionFilter.ALL,
        tags: Sequence[TagName] = (),
        limit: int = 30,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering and pagination.

        Args:
            sort: Sort order
            filter_by: Answered/unanswered filter
            tags: Keep questions carrying any of these tags (empty for all)
            limit: Maximum number of questions to return
            offset: Number of questions to skip

        Returns:
            List of questions matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        filter_by: QuestionFilter = QuestionFilter.ALL,
        tags: Sequence[TagName] = (),
    ) -> int:
        """Count questions matching the given filters."""
        pass

    @abstractmethod
    async def count_by_author(self, author_id: UserId) -> int:
        """Count questions asked by a user."""
        pass

    @abstractmethod
    async def save(self, question: Question) -> Question:
        """Insert a new question.

        Args:
            question: The question to save

        Returns:
            The saved question
        """
        pass

    @abstractmethod
    async def apply_vote_delta(
        self, question_id: QuestionId, delta: int
    ) -> Optional[int]:
        """Atomically add delta to vote_total.

        Args:
            question_id: The question ID
            delta: Signed change (-2..2)

        Returns:
            The new vote_total, or None if the question does not exist
        """
        pass

    @abstractmethod
    async def increment_views(self, question_id: QuestionId) -> Optional[int]:
        """Atomically add 1 to view_count.

        Returns:
            The new view_count, or None if the question does not exist
        """
        pass

    @abstractmethod
    async def increment_answer_count(self, question_id: QuestionId) -> None:
        """Atomically add 1 to answer_count."""
        pass

    @abstractmethod
    async def set_accepted_answer(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> None:
        """Point the question at its accepted answer (None to clear)."""
        pass

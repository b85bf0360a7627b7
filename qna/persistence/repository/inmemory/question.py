"""In-memory question repository for testing."""

from typing import List, Optional, Sequence

from qna.domain.model import Question
from qna.domain.model.common import utc_now
from qna.domain.repository.question import (
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
)
from qna.domain.value import AnswerId, QuestionId, TagName, UserId

from .store import InMemoryStore


class InMemoryQuestionRepository(QuestionRepository):
    """In-memory implementation of QuestionRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._questions = store.questions

    def _matching(
        self, filter_by: QuestionFilter, tags: Sequence[TagName]
    ) -> List[Question]:
        wanted = {tag.root for tag in tags}
        questions = []
        for question in self._questions.values():
            if filter_by == QuestionFilter.ANSWERED and question.answer_count == 0:
                continue
            if filter_by == QuestionFilter.UNANSWERED and question.answer_count > 0:
                continue
            if wanted and not wanted.intersection(question.tag_names):
                continue
            questions.append(question)
        return questions

    async def find_by_id(
        self, question_id: QuestionId, for_update: bool = False
    ) -> Optional[Question]:
        """Find question by ID. Row locks are not needed in memory."""
        return self._questions.get(question_id)

    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        filter_by: QuestionFilter = QuestionFilter.ALL,
        tags: Sequence[TagName] = (),
        limit: int = 30,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering and pagination."""
        questions = sorted(
            self._matching(filter_by, tags), key=lambda q: q.created_at, reverse=True
        )
        # Stable sort keeps newest first among equal keys
        if sort == QuestionSortOrder.VOTES:
            questions.sort(key=lambda q: q.vote_total, reverse=True)
        elif sort == QuestionSortOrder.VIEWS:
            questions.sort(key=lambda q: q.view_count, reverse=True)
        return questions[offset : offset + limit]

    async def count(
        self,
        filter_by: QuestionFilter = QuestionFilter.ALL,
        tags: Sequence[TagName] = (),
    ) -> int:
        """Count questions matching the given filters."""
        return len(self._matching(filter_by, tags))

    async def count_by_author(self, author_id: UserId) -> int:
        """Count questions asked by a user."""
        return sum(1 for q in self._questions.values() if q.author_id == author_id)

    async def save(self, question: Question) -> Question:
        """Save question."""
        self._questions[question.id] = question
        return question

    async def apply_vote_delta(
        self, question_id: QuestionId, delta: int
    ) -> Optional[int]:
        """Add delta to vote_total."""
        question = self._questions.get(question_id)
        if not question:
            return None
        total = question.vote_total + delta
        self._questions[question_id] = question.model_copy(update={"vote_total": total})
        return total

    async def increment_views(self, question_id: QuestionId) -> Optional[int]:
        """Add 1 to view_count."""
        question = self._questions.get(question_id)
        if not question:
            return None
        views = question.view_count + 1
        self._questions[question_id] = question.model_copy(update={"view_count": views})
        return views

    async def increment_answer_count(self, question_id: QuestionId) -> None:
        """Add 1 to answer_count."""
        question = self._questions.get(question_id)
        if question:
            self._questions[question_id] = question.model_copy(
                update={
                    "answer_count": question.answer_count + 1,
                    "updated_at": utc_now(),
                }
            )

    async def set_accepted_answer(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> None:
        """Point the question at its accepted answer."""
        question = self._questions.get(question_id)
        if question:
            self._questions[question_id] = question.model_copy(
                update={"accepted_answer_id": answer_id, "updated_at": utc_now()}
            )

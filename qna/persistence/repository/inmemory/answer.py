"""In-memory answer repository for testing."""

from typing import List, Optional

from qna.domain.model import Answer
from qna.domain.model.common import utc_now
from qna.domain.repository.answer import AnswerRepository
from qna.domain.value import AnswerId, QuestionId

from .store import InMemoryStore


class InMemoryAnswerRepository(AnswerRepository):
    """In-memory implementation of AnswerRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._answers = store.answers

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find answer by ID."""
        return self._answers.get(answer_id)

    async def find_by_question(self, question_id: QuestionId) -> List[Answer]:
        """Find answers of a question, accepted first, then by votes, then oldest."""
        answers = [a for a in self._answers.values() if a.question_id == question_id]
        return sorted(
            answers, key=lambda a: (not a.is_accepted, -a.vote_total, a.created_at)
        )

    async def save(self, answer: Answer) -> Answer:
        """Save answer."""
        self._answers[answer.id] = answer
        return answer

    async def apply_vote_delta(self, answer_id: AnswerId, delta: int) -> Optional[int]:
        """Add delta to vote_total."""
        answer = self._answers.get(answer_id)
        if not answer:
            return None
        total = answer.vote_total + delta
        self._answers[answer_id] = answer.model_copy(update={"vote_total": total})
        return total

    async def mark_accepted(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> None:
        """Flag exactly the given answer of the question."""
        for answer in list(self._answers.values()):
            if answer.question_id != question_id:
                continue
            accepted = answer.id == answer_id
            if answer.is_accepted != accepted:
                self._answers[answer.id] = answer.model_copy(
                    update={"is_accepted": accepted, "updated_at": utc_now()}
                )

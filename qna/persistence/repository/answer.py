"""PostgreSQL implementation of Answer repository."""

from typing import List, Optional

from sqlalchemy import and_, asc, desc, func, select

from qna.domain.model import Answer
from qna.domain.repository import AnswerRepository
from qna.domain.value import AnswerId, QuestionId
from qna.persistence.mappers import answer_to_dict, row_to_answer
from qna.persistence.tables import answers_table

from .base import PostgresRepository


class PostgresAnswerRepository(PostgresRepository, AnswerRepository):
    """PostgreSQL implementation of AnswerRepository."""

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        stmt = select(answers_table).where(answers_table.c.id == answer_id)
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_answer(dict(row)) if row else None

    async def find_by_question(self, question_id: QuestionId) -> List[Answer]:
        """Find all answers under a question, accepted first."""
        stmt = (
            select(answers_table)
            .where(answers_table.c.question_id == question_id)
            .order_by(
                desc(answers_table.c.is_accepted),
                desc(answers_table.c.vote_total),
                asc(answers_table.c.created_at),
            )
        )
        result = await self._execute(stmt)
        return [row_to_answer(dict(row)) for row in result.mappings().all()]

    async def save(self, answer: Answer) -> Answer:
        """Insert a new answer."""
        stmt = answers_table.insert().values(**answer_to_dict(answer))
        await self._execute(stmt)
        await self.session.flush()
        return answer

    async def apply_vote_delta(self, answer_id: AnswerId, delta: int) -> Optional[int]:
        """Atomically add delta to vote_total and return the new total."""
        stmt = (
            answers_table.update()
            .where(answers_table.c.id == answer_id)
            .values(vote_total=answers_table.c.vote_total + delta)
            .returning(answers_table.c.vote_total)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def mark_accepted(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> None:
        """Flag exactly one answer of the question (or none).

        Clears first, then sets, so the partial unique index never sees two
        flagged rows. Other transactions only see the committed result.
        """
        clear = answers_table.update().where(
            and_(
                answers_table.c.question_id == question_id,
                answers_table.c.is_accepted.is_(True),
            )
        )
        if answer_id is not None:
            clear = clear.where(answers_table.c.id != answer_id)
        await self._execute(clear.values(is_accepted=False, updated_at=func.now()))

        if answer_id is not None:
            accept = (
                answers_table.update()
                .where(
                    and_(
                        answers_table.c.id == answer_id,
                        answers_table.c.question_id == question_id,
                    )
                )
                .values(is_accepted=True, updated_at=func.now())
            )
            await self._execute(accept)

        await self.session.flush()

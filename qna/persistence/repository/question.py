"""PostgreSQL implementation of Question repository."""

from typing import List, Optional, Sequence

import logfire
from sqlalchemy import desc, func, select

from qna.domain.model import Question
from qna.domain.repository import (
    QuestionFilter,
    QuestionRepository,
    QuestionSortOrder,
)
from qna.domain.value import AnswerId, QuestionId, TagName, UserId
from qna.persistence.mappers import question_to_dict, row_to_question
from qna.persistence.tables import questions_table

from .base import PostgresRepository


class PostgresQuestionRepository(PostgresRepository, QuestionRepository):
    """PostgreSQL implementation of QuestionRepository."""

    def _apply_filters(self, stmt, filter_by: QuestionFilter, tags: Sequence[TagName]):
        if filter_by == QuestionFilter.ANSWERED:
            stmt = stmt.where(questions_table.c.answer_count > 0)
        elif filter_by == QuestionFilter.UNANSWERED:
            stmt = stmt.where(questions_table.c.answer_count == 0)

        if tags:
            # Any-of match, served by the GIN index on tags
            stmt = stmt.where(
                questions_table.c.tags.overlap([tag.root for tag in tags])
            )
        return stmt

    async def find_by_id(
        self, question_id: QuestionId, for_update: bool = False
    ) -> Optional[Question]:
        """Find a question by ID, optionally locking the row."""
        stmt = select(questions_table).where(questions_table.c.id == question_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_question(dict(row)) if row else None

    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        filter_by: QuestionFilter = QuestionFilter.ALL,
        tags: Sequence[TagName] = (),
        limit: int = 30,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering and pagination."""
        with logfire.span(
            "question_repository.find_all",
            sort=sort.value,
            filter_by=filter_by.value,
            tags=[tag.root for tag in tags],
            limit=limit,
            offset=offset,
        ):
            stmt = self._apply_filters(select(questions_table), filter_by, tags)

            # Newest first breaks ties in every order
            if sort == QuestionSortOrder.VOTES:
                stmt = stmt.order_by(desc(questions_table.c.vote_total))
            elif sort == QuestionSortOrder.VIEWS:
                stmt = stmt.order_by(desc(questions_table.c.view_count))
            stmt = stmt.order_by(desc(questions_table.c.created_at))

            stmt = stmt.limit(limit).offset(offset)

            result = await self._execute(stmt)
            questions = [row_to_question(dict(row)) for row in result.mappings().all()]
            logfire.info("Found questions", count=len(questions))
            return questions

    async def count(
        self,
        filter_by: QuestionFilter = QuestionFilter.ALL,
        tags: Sequence[TagName] = (),
    ) -> int:
        """Count questions matching the given filters."""
        stmt = self._apply_filters(
            select(func.count()).select_from(questions_table), filter_by, tags
        )
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def count_by_author(self, author_id: UserId) -> int:
        """Count questions asked by a user."""
        stmt = (
            select(func.count())
            .select_from(questions_table)
            .where(questions_table.c.author_id == author_id)
        )
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def save(self, question: Question) -> Question:
        """Insert a new question."""
        with logfire.span("question_repository.save", question_id=str(question.id)):
            stmt = questions_table.insert().values(**question_to_dict(question))
            await self._execute(stmt)
            await self.session.flush()
            return question

    async def apply_vote_delta(
        self, question_id: QuestionId, delta: int
    ) -> Optional[int]:
        """Atomically add delta to vote_total and return the new total."""
        stmt = (
            questions_table.update()
            .where(questions_table.c.id == question_id)
            .values(vote_total=questions_table.c.vote_total + delta)
            .returning(questions_table.c.vote_total)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def increment_views(self, question_id: QuestionId) -> Optional[int]:
        """Atomically add 1 to view_count and return the new count."""
        stmt = (
            questions_table.update()
            .where(questions_table.c.id == question_id)
            .values(view_count=questions_table.c.view_count + 1)
            .returning(questions_table.c.view_count)
        )
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def increment_answer_count(self, question_id: QuestionId) -> None:
        """Atomically add 1 to answer_count."""
        stmt = (
            questions_table.update()
            .where(questions_table.c.id == question_id)
            .values(
                answer_count=questions_table.c.answer_count + 1,
                updated_at=func.now(),
            )
        )
        await self._execute(stmt)
        await self.session.flush()

    async def set_accepted_answer(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> None:
        """Point the question at its accepted answer."""
        stmt = (
            questions_table.update()
            .where(questions_table.c.id == question_id)
            .values(accepted_answer_id=answer_id, updated_at=func.now())
        )
        await self._execute(stmt)
        await self.session.flush()

"""Unit tests for PostgresUserRepository statements that need no database."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from qna.domain.error import TransientError
from qna.domain.value import UserId
from qna.persistence.repository import PostgresUserRepository


class RecordingSavepoint:
    """Stands in for ``session.begin_nested()``."""

    def __init__(self) -> None:
        self.active = False
        self.exit_error: BaseException | None = None

    async def __aenter__(self):
        self.active = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.active = False
        self.exit_error = exc
        return False


def _session(savepoint: RecordingSavepoint, execute: AsyncMock) -> MagicMock:
    session = MagicMock()
    session.begin_nested = MagicMock(return_value=savepoint)
    session.execute = execute
    return session


class TestRefreshAnswerStats:
    """Tests for refresh_answer_stats."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failure",
        [
            OperationalError("UPDATE users", {}, Exception("statement timeout")),
            TimeoutError(),
        ],
    )
    async def test_failed_recount_only_rolls_back_its_savepoint(self, failure):
        # Arrange
        savepoint = RecordingSavepoint()
        statements_in_savepoint = []

        async def execute(stmt):
            statements_in_savepoint.append(savepoint.active)
            raise failure

        repository = PostgresUserRepository(
            _session(savepoint, AsyncMock(side_effect=execute))
        )

        # Act
        with pytest.raises(TransientError):
            await repository.refresh_answer_stats(UserId(uuid4()), lambda n: "Helper")

        # Assert
        assert statements_in_savepoint == [True]
        assert isinstance(savepoint.exit_error, TransientError)

    @pytest.mark.asyncio
    async def test_count_and_badge_are_written_in_one_savepoint(self):
        # Arrange
        savepoint = RecordingSavepoint()
        statements_in_savepoint = []
        recount = MagicMock()
        recount.scalar_one_or_none.return_value = 5

        async def execute(stmt):
            statements_in_savepoint.append(savepoint.active)
            return recount

        repository = PostgresUserRepository(
            _session(savepoint, AsyncMock(side_effect=execute))
        )
        badge_for = MagicMock(return_value="Helper")

        # Act
        answer_count = await repository.refresh_answer_stats(UserId(uuid4()), badge_for)

        # Assert
        assert answer_count == 5
        badge_for.assert_called_once_with(5)
        assert statements_in_savepoint == [True, True]
        assert savepoint.exit_error is None

    @pytest.mark.asyncio
    async def test_unknown_user(self):
        savepoint = RecordingSavepoint()
        recount = MagicMock()
        recount.scalar_one_or_none.return_value = None
        execute = AsyncMock(return_value=recount)
        repository = PostgresUserRepository(_session(savepoint, execute))

        assert await repository.refresh_answer_stats(UserId(uuid4()), str) is None
        assert execute.await_count == 1

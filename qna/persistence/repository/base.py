"""Shared plumbing for PostgreSQL repositories."""

from typing import Any

import logfire
from sqlalchemy.engine import Result
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from qna.domain.error import TransientError


class PostgresRepository:
    """Base for repositories bound to the request's session.

    Lost connections and other operational failures surface as
    ``TransientError`` so callers can retry the whole request. Integrity
    errors pass through unchanged for the domain services to interpret.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Any) -> Result:
        try:
            return await self.session.execute(stmt)
        except TimeoutError as e:
            logfire.error("Database statement timed out", error=str(e))
            raise TransientError("Database statement timed out") from e
        except (OperationalError, InterfaceError) as e:
            logfire.error("Database unavailable", error=str(e))
            raise TransientError("Database temporarily unavailable") from e
        except DBAPIError as e:
            if e.connection_invalidated:
                logfire.error("Database connection lost", error=str(e))
                raise TransientError("Database connection lost") from e
            raise

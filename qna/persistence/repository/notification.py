"""PostgreSQL implementation of Notification repository."""

from typing import List, Optional

from sqlalchemy import and_, desc, func, select, update

from qna.domain.model import Notification
from qna.domain.repository import NotificationRepository
from qna.domain.value import NotificationId, UserId
from qna.persistence.mappers import notification_to_dict, row_to_notification
from qna.persistence.tables import notifications_table

from .base import PostgresRepository


class PostgresNotificationRepository(PostgresRepository, NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    async def find_by_id(self, notification_id: NotificationId) -> Optional[Notification]:
        """Find a notification by ID."""
        stmt = select(notifications_table).where(
            notifications_table.c.id == notification_id
        )
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_notification(dict(row)) if row else None

    async def find_by_user(
        self,
        user_id: UserId,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Notification]:
        """Find a user's notifications, newest first."""
        stmt = select(notifications_table).where(notifications_table.c.user_id == user_id)
        if unread_only:
            stmt = stmt.where(notifications_table.c.is_read.is_(False))
        stmt = (
            stmt.order_by(desc(notifications_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self._execute(stmt)
        return [row_to_notification(dict(row)) for row in result.mappings().all()]

    async def count_unread(self, user_id: UserId) -> int:
        """Count a user's unread notifications."""
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(
                and_(
                    notifications_table.c.user_id == user_id,
                    notifications_table.c.is_read.is_(False),
                )
            )
        )
        result = await self._execute(stmt)
        return result.scalar() or 0

    async def save(self, notification: Notification) -> Notification:
        """Insert a notification inside a savepoint.

        If the insert fails only the savepoint is rolled back, so the answer
        or acceptance that triggered it still commits.
        """
        stmt = notifications_table.insert().values(**notification_to_dict(notification))
        async with self.session.begin_nested():
            await self._execute(stmt)
        return notification

    async def mark_read(self, notification_id: NotificationId) -> bool:
        """Mark one notification read."""
        stmt = (
            update(notifications_table)
            .where(notifications_table.c.id == notification_id)
            .values(is_read=True)
        )
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark all unread notifications of a user read."""
        stmt = (
            update(notifications_table)
            .where(
                and_(
                    notifications_table.c.user_id == user_id,
                    notifications_table.c.is_read.is_(False),
                )
            )
            .values(is_read=True)
        )
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

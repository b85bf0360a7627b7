"""Mark notification read use case."""

from uuid import UUID

from pydantic import BaseModel

from qna.domain.service import NotificationService
from qna.domain.value import NotificationId, UserId

from .list_notifications import NotificationItem


class MarkNotificationReadRequest(BaseModel):
    """Mark notification read request."""

    notification_id: str
    user_id: str  # User ID from authenticated user


class MarkNotificationReadResponse(BaseModel):
    """Mark notification read response."""

    notification: NotificationItem
    unread_count: int


class MarkNotificationReadUseCase:
    """Use case for marking one notification read."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: MarkNotificationReadRequest
    ) -> MarkNotificationReadResponse:
        """Execute mark read flow.

        Raises:
            NotFoundError: If notification not found
            PermissionDeniedError: If the caller is not the recipient
        """
        user_id = UserId(UUID(request.user_id))
        notification = await self.notification_service.mark_read(
            NotificationId(UUID(request.notification_id)), user_id
        )
        unread = await self.notification_service.unread_count(user_id)

        return MarkNotificationReadResponse(
            notification=NotificationItem.from_notification(notification),
            unread_count=unread,
        )

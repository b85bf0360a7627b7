"""List notifications use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from qna.domain.model import Notification
from qna.domain.service import NotificationService
from qna.domain.value import NotificationType, UserId


class NotificationItem(BaseModel):
    """Notification in a response."""

    notification_id: str
    type: NotificationType
    title: str
    message: str
    is_read: bool
    question_id: str | None
    answer_id: str | None
    created_at: datetime

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationItem":
        return cls(
            notification_id=str(notification.id),
            type=notification.type,
            title=notification.title,
            message=notification.message,
            is_read=notification.is_read,
            question_id=str(notification.question_id) if notification.question_id else None,
            answer_id=str(notification.answer_id) if notification.answer_id else None,
            created_at=notification.created_at,
        )


class ListNotificationsRequest(BaseModel):
    """List notifications request."""

    user_id: str  # User ID from authenticated user
    unread_only: bool = False
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class ListNotificationsResponse(BaseModel):
    """List notifications response."""

    notifications: list[NotificationItem]
    unread_count: int
    limit: int
    offset: int


class ListNotificationsUseCase:
    """Use case for the notification dropdown."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize list notifications use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(
        self, request: ListNotificationsRequest
    ) -> ListNotificationsResponse:
        """Execute list notifications flow."""
        user_id = UserId(UUID(request.user_id))

        notifications = await self.notification_service.list_notifications(
            user_id,
            unread_only=request.unread_only,
            limit=request.limit,
            offset=request.offset,
        )
        unread = await self.notification_service.unread_count(user_id)

        return ListNotificationsResponse(
            notifications=[NotificationItem.from_notification(n) for n in notifications],
            unread_count=unread,
            limit=request.limit,
            offset=request.offset,
        )

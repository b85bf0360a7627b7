"""Mark all notifications read use case."""

from uuid import UUID

from pydantic import BaseModel

from qna.domain.service import NotificationService
from qna.domain.value import UserId


class MarkAllReadRequest(BaseModel):
    """Mark all read request."""

    user_id: str  # User ID from authenticated user


class MarkAllReadResponse(BaseModel):
    """Mark all read response."""

    marked: int


class MarkAllReadUseCase:
    """Use case for clearing the unread badge."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: MarkAllReadRequest) -> MarkAllReadResponse:
        marked = await self.notification_service.mark_all_read(
            UserId(UUID(request.user_id))
        )
        return MarkAllReadResponse(marked=marked)

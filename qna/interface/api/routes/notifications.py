"""Notification routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from qna.application.usecase.notification import (
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    MarkAllReadRequest,
    MarkAllReadResponse,
    MarkAllReadUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadResponse,
    MarkNotificationReadUseCase,
)
from qna.domain.service import JWTService
from qna.interface.api.errors import require_user

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    list_notifications_use_case: FromDishka[ListNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    unread_only: bool = False,
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    auth_token: str | None = Cookie(default=None),
) -> ListNotificationsResponse:
    """List the caller's notifications, newest first, with the unread count."""
    user_id = require_user(
        jwt_service.get_user_id_from_token(auth_token), "read notifications"
    )

    return await list_notifications_use_case.execute(
        ListNotificationsRequest(
            user_id=str(user_id),
            unread_only=unread_only,
            limit=limit,
            offset=offset,
        )
    )


# Declared before /{notification_id}/read so "read-all" is never taken for an ID
@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    mark_all_read_use_case: FromDishka[MarkAllReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkAllReadResponse:
    """Mark every notification of the caller read."""
    user_id = require_user(
        jwt_service.get_user_id_from_token(auth_token), "update notifications"
    )

    return await mark_all_read_use_case.execute(
        MarkAllReadRequest(user_id=str(user_id))
    )


@router.post("/{notification_id}/read", response_model=MarkNotificationReadResponse)
async def mark_notification_read(
    notification_id: UUID,
    mark_notification_read_use_case: FromDishka[MarkNotificationReadUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkNotificationReadResponse:
    """Mark one notification read.

    Raises:
        HTTPException: 401 if not authenticated
    """
    user_id = require_user(
        jwt_service.get_user_id_from_token(auth_token), "update notifications"
    )

    return await mark_notification_read_use_case.execute(
        MarkNotificationReadRequest(
            notification_id=str(notification_id), user_id=str(user_id)
        )
    )

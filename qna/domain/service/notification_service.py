"""Notification domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from qna.config import PolicySettings
from qna.domain.error import NotFoundError, PermissionDeniedError
from qna.domain.model import Answer, Notification, Question
from qna.domain.repository import NotificationRepository
from qna.domain.value import (
    AI_ASSISTANT_USER_ID,
    NotificationId,
    NotificationType,
    UserId,
)

from .base import Service

MAX_TITLE_IN_MESSAGE = 80


def _shorten(title: str) -> str:
    if len(title) <= MAX_TITLE_IN_MESSAGE:
        return title
    return title[: MAX_TITLE_IN_MESSAGE - 3].rstrip() + "..."


class NotificationService(Service):
    """Creates and reads notifications.

    The ``notify_*`` methods are called after the primary write and never
    raise: a lost notification is preferable to a lost answer or vote.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        policy: PolicySettings,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Notification repository
            policy: Community policy settings
        """
        self.notification_repository = notification_repository
        self.policy = policy

    async def notify_answer_posted(
        self, question: Question, answer: Answer, answerer_name: str
    ) -> Optional[Notification]:
        """Tell the asker their question has a new answer.

        Nothing is sent when the asker answered their own question.

        Returns:
            The stored notification, or None if none was sent or storing failed
        """
        if answer.author_id == question.author_id:
            return None

        return await self._emit(
            Notification(
                id=NotificationId(uuid4()),
                user_id=question.author_id,
                type=NotificationType.ANSWER,
                title="New Answer",
                message=f'{answerer_name} answered your question "{_shorten(question.title)}"',
                question_id=question.id,
                answer_id=answer.id,
            )
        )

    async def notify_answer_accepted(
        self, question: Question, answer: Answer
    ) -> Optional[Notification]:
        """Tell an answer's author that the asker accepted it.

        Skipped when disabled by policy, for self-answers and for the AI
        assistant.
        """
        if not self.policy.notify_on_accept:
            return None
        if answer.author_id in (question.author_id, AI_ASSISTANT_USER_ID):
            return None

        return await self._emit(
            Notification(
                id=NotificationId(uuid4()),
                user_id=answer.author_id,
                type=NotificationType.ACCEPTED,
                title="Answer Accepted",
                message=f'Your answer to "{_shorten(question.title)}" was accepted',
                question_id=question.id,
                answer_id=answer.id,
            )
        )

    async def _emit(self, notification: Notification) -> Optional[Notification]:
        with logfire.span(
            "notification_service.emit",
            type=notification.type.value,
            user_id=str(notification.user_id),
        ):
            try:
                saved = await self.notification_repository.save(notification)
            except Exception as e:
                logfire.error(
                    "Failed to store notification",
                    type=notification.type.value,
                    user_id=str(notification.user_id),
                    error=str(e),
                )
                return None

            logfire.info(
                "Notification created",
                notification_id=str(saved.id),
                type=saved.type.value,
            )
            return saved

    async def list_notifications(
        self,
        user_id: UserId,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Notification]:
        """A user's notifications, newest first."""
        with logfire.span(
            "notification_service.list_notifications",
            user_id=str(user_id),
            unread_only=unread_only,
        ):
            return await self.notification_repository.find_by_user(
                user_id, unread_only=unread_only, limit=limit, offset=offset
            )

    async def unread_count(self, user_id: UserId) -> int:
        """Number of unread notifications."""
        return await self.notification_repository.count_unread(user_id)

    async def mark_read(
        self, notification_id: NotificationId, user_id: UserId
    ) -> Notification:
        """Mark one notification read.

        Args:
            notification_id: Notification ID
            user_id: Caller, must be the recipient

        Returns:
            The notification as read

        Raises:
            NotFoundError: If notification not found
            PermissionDeniedError: If the caller is not the recipient
        """
        with logfire.span(
            "notification_service.mark_read",
            notification_id=str(notification_id),
            user_id=str(user_id),
        ):
            notification = await self.notification_repository.find_by_id(notification_id)
            if not notification:
                raise NotFoundError("Notification", str(notification_id))

            if notification.user_id != user_id:
                logfire.warn(
                    "Marking someone else's notification",
                    notification_id=str(notification_id),
                    user_id=str(user_id),
                )
                raise PermissionDeniedError(
                    "mark", "notification", str(notification_id), str(user_id)
                )

            if not notification.is_read:
                await self.notification_repository.mark_read(notification_id)
            return notification.model_copy(update={"is_read": True})

    async def mark_all_read(self, user_id: UserId) -> int:
        """Mark all of a user's notifications read.

        Returns:
            Number of notifications that were unread
        """
        with logfire.span("notification_service.mark_all_read", user_id=str(user_id)):
            changed = await self.notification_repository.mark_all_read(user_id)
            logfire.info("Notifications marked read", user_id=str(user_id), count=changed)
            return changed

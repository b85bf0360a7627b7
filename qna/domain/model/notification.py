"""Notification entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from qna.domain.model.common import DomainModel, utc_now
from qna.domain.value import (
    AnswerId,
    NotificationId,
    NotificationType,
    QuestionId,
    UserId,
)


class Notification(DomainModel):
    """Message for a user about activity on their content.

    Only created by the notification emitter; afterwards only ``is_read``
    changes.
    """

    id: NotificationId
    user_id: UserId  # Recipient
    type: NotificationType
    title: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=1000)
    is_read: bool = False
    question_id: Optional[QuestionId] = None
    answer_id: Optional[AnswerId] = None
    created_at: datetime = Field(default_factory=utc_now)

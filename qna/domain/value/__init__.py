"""Domain value objects for the Q&A community."""

from qna.domain.value.identifiers import (
    AI_ASSISTANT_USER_ID,
    AI_ASSISTANT_USERNAME,
    AnswerId,
    NotificationId,
    QuestionId,
    UserId,
    VoteId,
)
from qna.domain.value.types import (
    NotificationType,
    TagName,
    TargetType,
    Username,
    UserRole,
    VoteValue,
)

__all__ = [
    # Identifiers
    "UserId",
    "QuestionId",
    "AnswerId",
    "VoteId",
    "NotificationId",
    "AI_ASSISTANT_USER_ID",
    "AI_ASSISTANT_USERNAME",
    # Types
    "NotificationType",
    "TagName",
    "TargetType",
    "Username",
    "UserRole",
    "VoteValue",
]

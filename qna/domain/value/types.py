"""Domain value objects for the Q&A community.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum, IntEnum

from pydantic import field_validator

from qna.domain.value.common import RootValueObject


class VoteValue(IntEnum):
    """Direction of a vote. Stored as the signed integer itself."""

    UP = 1
    DOWN = -1


class TargetType(str, Enum):
    """Type of entity that can be voted on."""

    QUESTION = "question"
    ANSWER = "answer"


class UserRole(str, Enum):
    """Role of a community member."""

    GUEST = "guest"
    USER = "user"
    ADMIN = "admin"


class NotificationType(str, Enum):
    """Why a notification was created."""

    ANSWER = "answer"
    ACCEPTED = "accepted"
    MENTION = "mention"
    COMMENT = "comment"


class TagName(RootValueObject[str]):
    """Topic tag attached to a question.

    Normalized to lowercase and trimmed. Allows letters, digits and the
    characters ``-+#.`` so that tags like ``c++``, ``c#`` and ``node.js`` work.
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize_tag_name(cls, v: str) -> str:
        """Trim and lowercase before validation."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("root")
    @classmethod
    def validate_tag_name(cls, v: str) -> str:
        """Validate tag name format."""
        if not v:
            raise ValueError("Tag name must not be empty")
        if len(v) > 35:
            raise ValueError("Tag name must be at most 35 characters")
        if not re.match(r"^[a-z0-9][a-z0-9+#.\-]*$", v):
            raise ValueError(
                "Tag name must start with a letter or digit and contain only "
                "letters, digits, '-', '+', '#' or '.'"
            )
        return v


class Username(RootValueObject[str]):
    """Public, unique username."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username format."""
        if not re.match(r"^[A-Za-z0-9_.\-]{3,30}$", v):
            raise ValueError(
                "Username must be 3-30 characters of letters, digits, '_', '.' or '-'"
            )
        return v

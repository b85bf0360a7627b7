"""Strongly typed identifiers for Q&A domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
QuestionId = NewType("QuestionId", UUID)
AnswerId = NewType("AnswerId", UUID)
VoteId = NewType("VoteId", UUID)
NotificationId = NewType("NotificationId", UUID)

# Reserved author of AI-generated answers (seeded by migrations)
AI_ASSISTANT_USER_ID = UserId(UUID("00000000-0000-4000-8000-0000000000a1"))
AI_ASSISTANT_USERNAME = "ai-assistant"

"""Domain model entities for the Q&A community."""

from qna.domain.model.answer import Answer
from qna.domain.model.badge import (
    BADGE_TIERS,
    BadgeProgress,
    BadgeTier,
    badge_progress,
    next_badge,
    resolve_badge,
)
from qna.domain.model.notification import Notification
from qna.domain.model.question import Question
from qna.domain.model.user import User
from qna.domain.model.vote import Vote

__all__ = [
    "User",
    "Question",
    "Answer",
    "Vote",
    "Notification",
    "BadgeTier",
    "BadgeProgress",
    "BADGE_TIERS",
    "resolve_badge",
    "next_badge",
    "badge_progress",
]

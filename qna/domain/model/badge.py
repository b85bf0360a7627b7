"""Badge tiers.

A badge is a named milestone derived purely from how many questions a user
has answered. Tiers are ordered by threshold and the first one starts at 0,
so every non-negative answer count resolves to exactly one tier.
"""

from typing import Optional

from pydantic import Field

from qna.domain.error import InvalidArgumentError
from qna.domain.model.common import DomainModel


class BadgeTier(DomainModel):
    """A badge milestone."""

    name: str
    description: str
    icon: str
    minimum_answers: int = Field(ge=0)


class BadgeProgress(DomainModel):
    """Where a user stands on the badge ladder."""

    current: BadgeTier
    next: Optional[BadgeTier] = None
    answers_to_next: Optional[int] = None


BADGE_TIERS: tuple[BadgeTier, ...] = (
    BadgeTier(
        name="Newcomer",
        description="Welcome to the community!",
        icon="🌱",
        minimum_answers=0,
    ),
    BadgeTier(
        name="Helper",
        description="Answered 5 questions",
        icon="🤝",
        minimum_answers=5,
    ),
    BadgeTier(
        name="Contributor",
        description="Answered 15 questions",
        icon="💡",
        minimum_answers=15,
    ),
    BadgeTier(
        name="Expert",
        description="Answered 50 questions",
        icon="🎯",
        minimum_answers=50,
    ),
    BadgeTier(
        name="Master",
        description="Answered 100 questions",
        icon="👑",
        minimum_answers=100,
    ),
    BadgeTier(
        name="Legend",
        description="Answered 250 questions",
        icon="🏆",
        minimum_answers=250,
    ),
)


def _check_answer_count(answer_count: int) -> None:
    if answer_count < 0:
        raise InvalidArgumentError(
            f"Answer count must be non-negative, got {answer_count}"
        )


def resolve_badge(answer_count: int) -> BadgeTier:
    """Return the highest tier whose threshold is reached.

    Args:
        answer_count: Number of answers the user has posted

    Returns:
        The badge tier for that count

    Raises:
        InvalidArgumentError: If answer_count is negative
    """
    _check_answer_count(answer_count)
    current = BADGE_TIERS[0]
    for tier in BADGE_TIERS:
        if tier.minimum_answers <= answer_count:
            current = tier
        else:
            break
    return current


def next_badge(answer_count: int) -> Optional[BadgeTier]:
    """Return the lowest tier not yet reached, or None at the top tier.

    Raises:
        InvalidArgumentError: If answer_count is negative
    """
    _check_answer_count(answer_count)
    for tier in BADGE_TIERS:
        if tier.minimum_answers > answer_count:
            return tier
    return None


def badge_progress(answer_count: int) -> BadgeProgress:
    """Current tier, next tier and how many answers are still needed."""
    upcoming = next_badge(answer_count)
    return BadgeProgress(
        current=resolve_badge(answer_count),
        next=upcoming,
        answers_to_next=(
            upcoming.minimum_answers - answer_count if upcoming is not None else None
        ),
    )

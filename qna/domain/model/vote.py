"""Vote entity.

Votes are the ledger behind every question/answer ``vote_total``.
Each user holds at most one vote per target.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from qna.domain.model.common import DomainModel, utc_now
from qna.domain.value import TargetType, UserId, VoteId, VoteValue


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per target (enforced by database unique constraint)
    - Casting the same value again revokes the vote (toggle-off)
    - Casting the opposite value flips it
    - Polymorphic reference to the target (question or answer)
    """

    id: VoteId
    user_id: UserId
    target_type: TargetType
    target_id: UUID  # QuestionId or AnswerId (both are UUIDs)
    value: VoteValue
    created_at: datetime = Field(default_factory=utc_now)

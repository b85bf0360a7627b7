"""Cast vote use case."""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from qna.domain.service import VoteAction, VoteService
from qna.domain.value import TargetType, UserId, VoteValue

from ..base import BaseUseCase


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    target_type: TargetType
    target_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    value: Literal[1, -1]


class CastVoteResponse(BaseModel):
    """Cast vote response.

    ``vote_total`` is read back from the store; clients display it instead of
    adjusting their own copy.
    """

    target_type: TargetType
    target_id: str
    action: VoteAction
    delta: int
    vote_total: int
    user_vote: int | None


class CastVoteUseCase(BaseUseCase):
    """Use case for voting on a question or answer."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Raises:
            NotFoundError: If the target does not exist
            PermissionDeniedError: If voting on own content
            ConflictError: If a concurrent vote by the same user interfered
        """
        outcome = await self.vote_service.cast_vote(
            user_id=UserId(UUID(request.user_id)),
            target_type=request.target_type,
            target_id=UUID(request.target_id),
            value=VoteValue(request.value),
        )

        return CastVoteResponse(
            target_type=request.target_type,
            target_id=request.target_id,
            action=outcome.action,
            delta=outcome.delta,
            vote_total=outcome.vote_total,
            user_vote=int(outcome.user_vote) if outcome.user_vote is not None else None,
        )

"""Vote routes."""

from typing import Literal
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from qna.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
)
from qna.domain.service import JWTService
from qna.domain.value import TargetType
from qna.interface.api.errors import require_user

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for casting a vote.

    Casting the same value twice removes the vote; casting the opposite
    value flips it.
    """

    value: Literal[1, -1]


async def _cast(
    target_type: TargetType,
    target_id: UUID,
    value: int,
    cast_vote_use_case: CastVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> CastVoteResponse:
    user_id = require_user(jwt_service.get_user_id_from_token(auth_token), "vote")

    return await cast_vote_use_case.execute(
        CastVoteRequest(
            target_type=target_type,
            target_id=str(target_id),
            user_id=str(user_id),
            value=value,
        )
    )


@router.post("/questions/{question_id}/vote", response_model=CastVoteResponse)
async def vote_on_question(
    question_id: UUID,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote on a question.

    Requires authentication.

    Returns:
        What happened to the vote and the question's new total
    """
    return await _cast(
        TargetType.QUESTION,
        question_id,
        request.value,
        cast_vote_use_case,
        jwt_service,
        auth_token,
    )


@router.post("/answers/{answer_id}/vote", response_model=CastVoteResponse)
async def vote_on_answer(
    answer_id: UUID,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Vote on an answer.

    Requires authentication.

    Returns:
        What happened to the vote and the answer's new total
    """
    return await _cast(
        TargetType.ANSWER,
        answer_id,
        request.value,
        cast_vote_use_case,
        jwt_service,
        auth_token,
    )

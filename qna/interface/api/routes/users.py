"""User profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from qna.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
    RegisterUserRequest,
    RegisterUserResponse,
    RegisterUserUseCase,
)
from qna.domain.service import JWTService
from qna.interface.api.errors import require_user

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class RegisterUserAPIRequest(BaseModel):
    """API request for creating the caller's profile."""

    username: str = Field(min_length=1, max_length=30)
    email: str = Field(min_length=3, max_length=320)


@router.post(
    "/me", response_model=RegisterUserResponse, status_code=status.HTTP_201_CREATED
)
async def register_me(
    request: RegisterUserAPIRequest,
    register_user_use_case: FromDishka[RegisterUserUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RegisterUserResponse:
    """Create the community profile for the signed-in identity.

    The profile's ID is the subject of the identity provider's token.

    Raises:
        HTTPException: 401 if not authenticated
    """
    user_id = require_user(
        jwt_service.get_user_id_from_token(auth_token), "create a profile"
    )

    return await register_user_use_case.execute(
        RegisterUserRequest(
            user_id=str(user_id),
            username=request.username,
            email=request.email,
        )
    )


@router.get("/me", response_model=GetUserProfileResponse)
async def get_my_profile(
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetUserProfileResponse:
    """Get the caller's own profile."""
    user_id = require_user(
        jwt_service.get_user_id_from_token(auth_token), "view your profile"
    )
    return await get_user_profile_use_case.execute(
        GetUserProfileRequest(user_id=str(user_id))
    )


@router.get("/{username}", response_model=GetUserProfileResponse)
async def get_user_profile(
    username: str,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
) -> GetUserProfileResponse:
    """Get a user's public profile with badge progress.

    Example:
        GET /users/alice

        Response:
        {
            "username": "alice",
            "reputation": 120,
            "answer_count": 20,
            "badge": {"name": "Contributor", ...},
            "next_badge": {"name": "Expert", ...},
            "answers_to_next_badge": 30,
            ...
        }
    """
    return await get_user_profile_use_case.execute(
        GetUserProfileRequest(username=username)
    )

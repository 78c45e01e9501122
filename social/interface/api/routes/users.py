"""User and profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Response, status
from pydantic import BaseModel, EmailStr, Field

from social.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from social.application.usecase.follow import (
    FollowListRequest,
    FollowRequest,
    FollowResponse,
    FollowUserUseCase,
    ListFollowersUseCase,
    ListFollowingUseCase,
    UnfollowUserUseCase,
)
from social.application.usecase.user import (
    DeleteProfileRequest,
    DeleteProfileUseCase,
    GetUserRequest,
    GetUserResponse,
    GetUserUseCase,
    SearchUsersRequest,
    SearchUsersUseCase,
    SuggestedUsersRequest,
    SuggestedUsersUseCase,
    UpdateProfileRequest,
    UpdateProfileResponse,
    UpdateProfileUseCase,
    UserListResponse,
)
from social.domain.error import ValidationError
from social.interface.api.dependencies import CurrentIdentity

router = APIRouter(tags=["users"], route_class=DishkaRoute)


class UpdateProfileAPIRequest(BaseModel):
    """API request for updating the caller's profile."""

    display_name: str | None = Field(default=None, min_length=1, max_length=128)
    username: str | None = Field(default=None, pattern=r"^[A-Za-z0-9._-]{3,30}$")
    email: EmailStr | None = None
    bio: str | None = Field(default=None, max_length=500)
    avatar_url: str | None = Field(default=None, max_length=2048)
    is_private: bool | None = None


@router.get("/profile", response_model=GetCurrentUserResponse)
async def get_profile(
    identity: CurrentIdentity, use_case: FromDishka[GetCurrentUserUseCase]
) -> GetCurrentUserResponse:
    """The caller's full profile."""
    return await use_case.execute(GetCurrentUserRequest(user_id=identity.user_id))


@router.put("/profile", response_model=UpdateProfileResponse)
async def update_profile(
    request: UpdateProfileAPIRequest,
    identity: CurrentIdentity,
    use_case: FromDishka[UpdateProfileUseCase],
) -> UpdateProfileResponse:
    """Partially update the caller's profile.

    Only fields present in the body change. Returns 409 if the new username
    or email is taken.
    """
    return await use_case.execute(
        UpdateProfileRequest(
            user_id=identity.user_id, **request.model_dump(exclude_unset=True)
        )
    )


@router.delete("/profile", status_code=status.HTTP_204_NO_CONTENT)
async def delete_profile(
    identity: CurrentIdentity, use_case: FromDishka[DeleteProfileUseCase]
) -> Response:
    """Delete the caller's account."""
    await use_case.execute(DeleteProfileRequest(user_id=identity.user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Static paths are registered before /users/{user_id}
@router.get("/users/suggested", response_model=UserListResponse)
async def suggested_users(
    identity: CurrentIdentity, use_case: FromDishka[SuggestedUsersUseCase]
) -> UserListResponse:
    """Users the caller might want to follow."""
    return await use_case.execute(SuggestedUsersRequest(user_id=identity.user_id))


@router.get("/users/search", response_model=UserListResponse)
async def search_users(
    identity: CurrentIdentity,
    use_case: FromDishka[SearchUsersUseCase],
    q: str = Query(default="", max_length=100),
) -> UserListResponse:
    """Search users by display name, username or email."""
    if not q.strip():
        raise ValidationError("Search query is required")
    return await use_case.execute(SearchUsersRequest(query=q))


@router.get("/users/{user_id}", response_model=GetUserResponse)
async def get_user(
    user_id: int, identity: CurrentIdentity, use_case: FromDishka[GetUserUseCase]
) -> GetUserResponse:
    """A user's profile."""
    return await use_case.execute(GetUserRequest(user_id=user_id))


@router.post(
    "/users/{user_id}/follow",
    response_model=FollowResponse,
    status_code=status.HTTP_201_CREATED,
)
async def follow_user(
    user_id: int, identity: CurrentIdentity, use_case: FromDishka[FollowUserUseCase]
) -> FollowResponse:
    """Follow a user.

    Returns 400 for self-follows, 404 for unknown users, 409 if already
    following.
    """
    return await use_case.execute(
        FollowRequest(follower_id=identity.user_id, following_id=user_id)
    )


@router.delete("/users/{user_id}/follow", status_code=status.HTTP_204_NO_CONTENT)
async def unfollow_user(
    user_id: int, identity: CurrentIdentity, use_case: FromDishka[UnfollowUserUseCase]
) -> Response:
    """Stop following a user."""
    await use_case.execute(
        FollowRequest(follower_id=identity.user_id, following_id=user_id)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/users/{user_id}/followers", response_model=UserListResponse)
async def list_followers(
    user_id: int, identity: CurrentIdentity, use_case: FromDishka[ListFollowersUseCase]
) -> UserListResponse:
    """Users following a user."""
    return await use_case.execute(FollowListRequest(user_id=user_id))


@router.get("/users/{user_id}/following", response_model=UserListResponse)
async def list_following(
    user_id: int, identity: CurrentIdentity, use_case: FromDishka[ListFollowingUseCase]
) -> UserListResponse:
    """Users a user follows."""
    return await use_case.execute(FollowListRequest(user_id=user_id))

"""Feed routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from social.application.usecase.feed import (
    GetFeedRequest,
    GetFeedResponse,
    GetFeedUseCase,
)
from social.interface.api.dependencies import CurrentIdentity

router = APIRouter(prefix="/feed", tags=["feed"], route_class=DishkaRoute)


@router.get("", response_model=GetFeedResponse)
async def get_feed(
    identity: CurrentIdentity,
    use_case: FromDishka[GetFeedUseCase],
    page: int = 1,
    limit: int | None = None,
) -> GetFeedResponse:
    """Newest posts with author, like and save state for the caller.

    Pages start at 1 (lower values are treated as 1). `limit` defaults to 10
    and is capped at 50.
    """
    return await use_case.execute(
        GetFeedRequest(user_id=identity.user_id, page=max(page, 1), limit=limit)
    )

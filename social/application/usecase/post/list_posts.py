"""List posts use case."""

import logfire
from pydantic import BaseModel, Field

from social.application.usecase.common import PostResponse, clamp_page_size
from social.domain.service import PostService
from social.domain.value import UserId


class ListPostsRequest(BaseModel):
    """List posts request."""

    user_id: int | None = None  # Filter by author
    skip: int = Field(default=0, ge=0)
    limit: int | None = None


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostResponse]
    total: int
    skip: int
    limit: int


class ListPostsUseCase:
    """Use case for listing posts newest first."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: Optional author filter and offset pagination

        Returns:
            Page of posts and the total matching count
        """
        limit = clamp_page_size(request.limit)
        author = UserId(request.user_id) if request.user_id is not None else None

        with logfire.span(
            "list_posts.execute", user_id=author, skip=request.skip, limit=limit
        ):
            total = await self.post_service.count_posts(author)
            posts = await self.post_service.list_posts(
                user_id=author, skip=request.skip, limit=limit
            )
            logfire.info("Posts listed", count=len(posts), total=total)

            return ListPostsResponse(
                posts=[PostResponse.from_post(post) for post in posts],
                total=total,
                skip=request.skip,
                limit=limit,
            )

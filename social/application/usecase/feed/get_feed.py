"""Get feed use case."""

import logfire
from pydantic import BaseModel, Field

from social.application.usecase.base import BaseUseCase
from social.application.usecase.common import (
    PageMeta,
    PostResponse,
    UserCompact,
    clamp_page_size,
)
from social.domain.repository import LikeRepository, SavedPostRepository
from social.domain.service import PostService, UserService
from social.domain.value import UserId


class FeedItem(PostResponse):
    """Post enriched for the viewer."""

    author: UserCompact | None
    is_liked: bool
    is_saved: bool


class GetFeedRequest(BaseModel):
    """Get feed request."""

    user_id: int  # From authenticated user
    page: int = Field(default=1, ge=1)
    limit: int | None = None


class GetFeedResponse(BaseModel):
    """Get feed response."""

    posts: list[FeedItem]
    meta: PageMeta


class GetFeedUseCase(BaseUseCase):
    """Use case for the home feed: newest posts from everyone."""

    def __init__(
        self,
        post_service: PostService,
        user_service: UserService,
        like_repository: LikeRepository,
        saved_post_repository: SavedPostRepository,
    ) -> None:
        """Initialize get feed use case.

        Args:
            post_service: Post domain service
            user_service: User domain service, for authors
            like_repository: Like repository, for the viewer's likes
            saved_post_repository: Saved post repository, for the viewer's saves
        """
        self.post_service = post_service
        self.user_service = user_service
        self.like_repository = like_repository
        self.saved_post_repository = saved_post_repository

    async def execute(self, request: GetFeedRequest) -> GetFeedResponse:
        """Execute get feed flow.

        Steps:
        1. Load one page of posts, newest first
        2. Batch-load authors, the viewer's likes and the viewer's saves
        3. Build items and the pagination block

        Args:
            request: Viewer and page

        Returns:
            Enriched posts and pagination metadata
        """
        limit = clamp_page_size(request.limit)
        viewer = UserId(request.user_id)

        with logfire.span(
            "get_feed.execute", user_id=viewer, page=request.page, limit=limit
        ):
            total = await self.post_service.count_posts()
            posts = await self.post_service.list_posts(
                skip=(request.page - 1) * limit, limit=limit
            )

            # Batch queries to avoid N+1
            post_ids = [post.id for post in posts]
            authors = await self.user_service.get_many([p.user_id for p in posts])
            liked = (
                await self.like_repository.find_liked_post_ids(viewer, post_ids)
                if post_ids
                else set()
            )
            saved = (
                await self.saved_post_repository.find_saved_post_ids(viewer, post_ids)
                if post_ids
                else set()
            )

            items = [
                FeedItem(
                    **PostResponse.from_post(post).model_dump(),
                    author=(
                        UserCompact.from_user(authors[post.user_id])
                        if post.user_id in authors
                        else None
                    ),
                    is_liked=post.id in liked,
                    is_saved=post.id in saved,
                )
                for post in posts
            ]
            logfire.info("Feed loaded", count=len(items), total=total)

            return GetFeedResponse(
                posts=items, meta=PageMeta.build(request.page, limit, total)
            )

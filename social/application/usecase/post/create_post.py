"""Create post use case."""

from pydantic import BaseModel, Field

from social.application.usecase.common import PostResponse
from social.domain.service import PostService
from social.domain.value import UserId


class CreatePostRequest(BaseModel):
    """Create post request."""

    user_id: int  # From authenticated user
    content: str = Field(min_length=1, max_length=280)
    image_urls: list[str] = Field(default_factory=list, max_length=10)
    video_urls: list[str] = Field(default_factory=list, max_length=4)


class CreatePostUseCase:
    """Use case for publishing a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: CreatePostRequest) -> PostResponse:
        """Execute create post flow.

        Steps:
        1. Store the post document
        2. Increment the author's post count (failures are logged only)

        Args:
            request: Create post request

        Returns:
            Created post
        """
        post = await self.post_service.create_post(
            author_id=UserId(request.user_id),
            content=request.content,
            image_urls=request.image_urls,
            video_urls=request.video_urls,
        )
        return PostResponse.from_post(post)

"""Get post use case."""

from pydantic import BaseModel

from social.application.usecase.common import PostResponse
from social.domain.service import PostService
from social.domain.value import PostId


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str


class GetPostUseCase:
    """Use case for loading a single post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: GetPostRequest) -> PostResponse:
        """Load a post.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.post_service.get_post(PostId(request.post_id))
        return PostResponse.from_post(post)

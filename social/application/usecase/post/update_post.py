"""Update and delete post use cases."""

from pydantic import BaseModel, Field

from social.application.usecase.common import PostResponse
from social.domain.service import PostService
from social.domain.value import PostId, UserId


class UpdatePostRequest(BaseModel):
    """Update post request.

    Only fields present in the payload are changed.
    """

    post_id: str
    user_id: int  # From authenticated user
    content: str | None = Field(default=None, min_length=1, max_length=280)
    image_urls: list[str] | None = Field(default=None, max_length=10)
    video_urls: list[str] | None = Field(default=None, max_length=4)


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str
    user_id: int  # From authenticated user


class UpdatePostUseCase:
    """Use case for editing a post.

    Only the author can edit; counters and timestamps are not editable.
    """

    def __init__(self, post_service: PostService) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: UpdatePostRequest) -> PostResponse:
        """Execute update post flow.

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the caller is not the author
        """
        changes = {
            key: value
            for key, value in request.model_dump(
                exclude_unset=True, exclude={"post_id", "user_id"}
            ).items()
            if value is not None
        }
        post = await self.post_service.update_post(
            PostId(request.post_id), UserId(request.user_id), changes
        )
        return PostResponse.from_post(post)


class DeletePostUseCase:
    """Use case for deleting a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize delete post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: DeletePostRequest) -> None:
        """Delete a post owned by the caller.

        Raises:
            NotFoundError: If the post does not exist
            NotAuthorizedError: If the caller is not the author
        """
        await self.post_service.delete_post(
            PostId(request.post_id), UserId(request.user_id)
        )

"""In-memory post and story repositories for testing."""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from social.domain.model import Post, Story
from social.domain.repository import PostRepository, StoryRepository
from social.domain.value import PostCounter, PostId, StoryId, UserId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    def _newest_first(self, posts: list[Post]) -> list[Post]:
        return sorted(posts, key=lambda p: (p.created_at, p.id), reverse=True)

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        return self._posts.get(post_id)

    async def find_by_ids(self, post_ids: Sequence[PostId]) -> list[Post]:
        return [self._posts[pid] for pid in post_ids if pid in self._posts]

    async def list_posts(
        self, user_id: Optional[UserId] = None, skip: int = 0, limit: int = 10
    ) -> list[Post]:
        posts = [
            p for p in self._posts.values() if user_id is None or p.user_id == user_id
        ]
        return self._newest_first(posts)[skip : skip + limit]

    async def count(self, user_id: Optional[UserId] = None) -> int:
        return sum(
            1 for p in self._posts.values() if user_id is None or p.user_id == user_id
        )

    async def create(self, post: Post) -> Post:
        if post.id in self._posts:
            raise IntegrityError("duplicate post id", None, Exception())
        self._posts[post.id] = post
        return post

    async def update(self, post: Post) -> Post:
        current = self._posts[post.id]
        stored = post.model_copy(
            update={
                "likes_count": current.likes_count,
                "comments_count": current.comments_count,
            }
        )
        self._posts[post.id] = stored
        return stored

    async def delete(self, post_id: PostId) -> bool:
        return self._posts.pop(post_id, None) is not None

    async def adjust_counter(
        self, post_id: PostId, counter: PostCounter, delta: int
    ) -> None:
        post = self._posts.get(post_id)
        if post:
            value = max(0, getattr(post, counter.value) + delta)
            self._posts[post_id] = post.model_copy(update={counter.value: value})


class InMemoryStoryRepository(StoryRepository):
    """In-memory implementation of StoryRepository for testing."""

    def __init__(self) -> None:
        self._stories: dict[StoryId, Story] = {}

    async def find_by_id(self, story_id: StoryId) -> Optional[Story]:
        return self._stories.get(story_id)

    async def list_active(self, now: datetime) -> list[Story]:
        active = [s for s in self._stories.values() if s.is_active(now)]
        return sorted(active, key=lambda s: s.created_at, reverse=True)

    async def create(self, story: Story) -> Story:
        self._stories[story.id] = story
        return story

    async def delete_expired(self, now: datetime) -> int:
        expired = [sid for sid, s in self._stories.items() if not s.is_active(now)]
        for story_id in expired:
            del self._stories[story_id]
        return len(expired)

"""In-memory social graph repositories for testing."""

from itertools import count
from typing import Optional, Sequence

from social.domain.model import Follow, FriendRequest, Like, SavedPost
from social.domain.model.common import utc_now
from social.domain.repository import (
    FollowRepository,
    FriendRequestRepository,
    LikeRepository,
    SavedPostRepository,
)
from social.domain.value import (
    FollowId,
    FriendRequestId,
    FriendRequestStatus,
    LikeId,
    PostId,
    SavedPostId,
    UserId,
)

from .user import duplicate


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing."""

    def __init__(self) -> None:
        self._likes: dict[tuple[PostId, UserId], Like] = {}
        self._ids = count(1)

    async def create(self, like: Like) -> Like:
        key = (like.post_id, like.user_id)
        if key in self._likes:
            raise duplicate("uq_likes_post_user")
        stored = like.model_copy(update={"id": LikeId(next(self._ids))})
        self._likes[key] = stored
        return stored

    async def delete(self, post_id: PostId, user_id: UserId) -> bool:
        return self._likes.pop((post_id, user_id), None) is not None

    async def exists(self, post_id: PostId, user_id: UserId) -> bool:
        return (post_id, user_id) in self._likes

    async def count(self, post_id: PostId) -> int:
        return sum(1 for pid, _ in self._likes if pid == post_id)

    async def find_liked_post_ids(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> set[PostId]:
        return {pid for pid, uid in self._likes if uid == user_id and pid in post_ids}


class InMemoryFollowRepository(FollowRepository):
    """In-memory implementation of FollowRepository for testing."""

    def __init__(self) -> None:
        self._follows: dict[tuple[UserId, UserId], Follow] = {}
        self._ids = count(1)

    def _recent_first(self) -> list[Follow]:
        return sorted(
            self._follows.values(), key=lambda f: (f.created_at, f.id), reverse=True
        )

    async def create(self, follow: Follow) -> Follow:
        key = (follow.follower_id, follow.following_id)
        if key in self._follows:
            raise duplicate("uq_follows_pair")
        stored = follow.model_copy(update={"id": FollowId(next(self._ids))})
        self._follows[key] = stored
        return stored

    async def delete(self, follower_id: UserId, following_id: UserId) -> bool:
        return self._follows.pop((follower_id, following_id), None) is not None

    async def exists(self, follower_id: UserId, following_id: UserId) -> bool:
        return (follower_id, following_id) in self._follows

    async def list_follower_ids(self, user_id: UserId) -> list[UserId]:
        return [
            f.follower_id for f in self._recent_first() if f.following_id == user_id
        ]

    async def list_following_ids(self, user_id: UserId) -> list[UserId]:
        return [
            f.following_id for f in self._recent_first() if f.follower_id == user_id
        ]


class InMemoryFriendRequestRepository(FriendRequestRepository):
    """In-memory implementation of FriendRequestRepository for testing.

    Like the database, allows one request per unordered pair of users.
    """

    def __init__(self) -> None:
        self._requests: dict[FriendRequestId, FriendRequest] = {}
        self._ids = count(1)

    async def find_by_id(self, request_id: FriendRequestId) -> Optional[FriendRequest]:
        return self._requests.get(request_id)

    async def find_between(
        self, user_a: UserId, user_b: UserId
    ) -> Optional[FriendRequest]:
        for request in self._requests.values():
            if request.involves(user_a) and request.involves(user_b):
                return request
        return None

    async def list_pending_for(self, receiver_id: UserId) -> list[FriendRequest]:
        pending = [
            r
            for r in self._requests.values()
            if r.receiver_id == receiver_id and r.status == FriendRequestStatus.PENDING
        ]
        return sorted(pending, key=lambda r: r.created_at, reverse=True)

    async def list_accepted_for(self, user_id: UserId) -> list[FriendRequest]:
        accepted = [
            r
            for r in self._requests.values()
            if r.involves(user_id) and r.status == FriendRequestStatus.ACCEPTED
        ]
        return sorted(accepted, key=lambda r: r.updated_at, reverse=True)

    async def create(self, request: FriendRequest) -> FriendRequest:
        if await self.find_between(request.sender_id, request.receiver_id):
            raise duplicate("uq_friend_requests_pair")
        stored = request.model_copy(update={"id": FriendRequestId(next(self._ids))})
        self._requests[stored.id] = stored
        return stored

    async def update(self, request: FriendRequest) -> FriendRequest:
        stored = request.model_copy(update={"updated_at": utc_now()})
        self._requests[request.id] = stored
        return stored

    async def delete(self, request_id: FriendRequestId) -> bool:
        return self._requests.pop(request_id, None) is not None


class InMemorySavedPostRepository(SavedPostRepository):
    """In-memory implementation of SavedPostRepository for testing."""

    def __init__(self) -> None:
        self._saved: dict[tuple[UserId, PostId], SavedPost] = {}
        self._ids = count(1)

    async def create(self, saved: SavedPost) -> SavedPost:
        key = (saved.user_id, saved.post_id)
        if key in self._saved:
            raise duplicate("uq_saved_posts_user_post")
        stored = saved.model_copy(update={"id": SavedPostId(next(self._ids))})
        self._saved[key] = stored
        return stored

    async def delete(self, user_id: UserId, post_id: PostId) -> bool:
        return self._saved.pop((user_id, post_id), None) is not None

    async def list_by_user(self, user_id: UserId) -> list[SavedPost]:
        saved = [s for s in self._saved.values() if s.user_id == user_id]
        return sorted(saved, key=lambda s: (s.created_at, s.id), reverse=True)

    async def find_saved_post_ids(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> set[PostId]:
        return {pid for uid, pid in self._saved if uid == user_id and pid in post_ids}

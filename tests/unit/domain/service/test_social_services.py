"""Unit tests for post, like, comment, follow, friend and saved post services."""

import pytest

from social.domain.error import (
    BusinessRuleViolationError,
    ConflictError,
    NotAuthorizedError,
    NotFoundError,
)
from social.domain.repository import (
    NotificationRepository,
    PostRepository,
    UserRepository,
)
from social.domain.service import (
    CommentService,
    FollowService,
    FriendService,
    LikeService,
    PostService,
    SavedPostService,
)
from social.domain.value import (
    FriendRequestStatus,
    NotificationType,
    PostId,
)
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestPostService:
    """Tests for PostService."""

    @pytest.mark.asyncio
    async def test_create_post_bumps_author_post_count(self, unit_env):
        """Creating a post should increment the author's posts_count."""
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        post_service = await unit_env.get(PostService)
        author = await make_user(user_repo, "alice")

        # Act
        post = await post_service.create_post(author.id, "Hello world", ["https://img/1"])

        # Assert
        assert len(post.id) == 32
        assert post.likes_count == 0
        assert (await user_repo.find_by_id(author.id)).posts_count == 1

    @pytest.mark.asyncio
    async def test_only_author_can_update(self, unit_env):
        """Editing someone else's post should raise NotAuthorizedError."""
        user_repo = await unit_env.get(UserRepository)
        post_service = await unit_env.get(PostService)
        author = await make_user(user_repo, "alice")
        other = await make_user(user_repo, "bob")
        post = await post_service.create_post(author.id, "Original")

        with pytest.raises(NotAuthorizedError):
            await post_service.update_post(post.id, other.id, {"content": "Hijacked"})

        updated = await post_service.update_post(post.id, author.id, {"content": "Edited"})
        assert updated.content == "Edited"

    @pytest.mark.asyncio
    async def test_delete_post_decrements_count(self, unit_env):
        """Deleting a post should remove it and decrement posts_count."""
        user_repo = await unit_env.get(UserRepository)
        post_service = await unit_env.get(PostService)
        author = await make_user(user_repo, "alice")
        post = await post_service.create_post(author.id, "Short-lived")

        await post_service.delete_post(post.id, author.id)

        with pytest.raises(NotFoundError):
            await post_service.get_post(post.id)
        assert (await user_repo.find_by_id(author.id)).posts_count == 0


class TestLikeService:
    """Tests for LikeService."""

    @pytest.mark.asyncio
    async def test_like_counts_and_notifies_author(self, unit_env):
        """A like should bump likes_count and notify the post author."""
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        post_service = await unit_env.get(PostService)
        like_service = await unit_env.get(LikeService)
        author = await make_user(user_repo, "alice")
        fan = await make_user(user_repo, "bob", display_name="Bob")
        post = await post_service.create_post(author.id, "Like me")

        # Act
        await like_service.like_post(post.id, fan.id)

        # Assert
        assert (await post_repo.find_by_id(post.id)).likes_count == 1
        assert await like_service.has_liked(post.id, fan.id)
        notifications = await notification_repo.list_for_recipient(
            author.id, skip=0, limit=10
        )
        assert len(notifications) == 1
        assert notifications[0].type == NotificationType.LIKE
        assert notifications[0].actor_id == fan.id
        assert notifications[0].target_id == post.id
        assert notifications[0].message == "Bob liked your post"

    @pytest.mark.asyncio
    async def test_double_like_conflicts(self, unit_env):
        """Liking twice should raise ConflictError and keep the count at one."""
        user_repo = await unit_env.get(UserRepository)
        post_service = await unit_env.get(PostService)
        like_service = await unit_env.get(LikeService)
        author = await make_user(user_repo, "alice")
        post = await post_service.create_post(author.id, "Like me")
        await like_service.like_post(post.id, author.id)

        with pytest.raises(ConflictError):
            await like_service.like_post(post.id, author.id)
        assert await like_service.count(post.id) == 1

    @pytest.mark.asyncio
    async def test_self_like_does_not_notify(self, unit_env):
        """Acting on your own content creates no notification."""
        user_repo = await unit_env.get(UserRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        post_service = await unit_env.get(PostService)
        like_service = await unit_env.get(LikeService)
        author = await make_user(user_repo, "alice")
        post = await post_service.create_post(author.id, "Like me")

        await like_service.like_post(post.id, author.id)

        assert await notification_repo.count_for_recipient(author.id) == 0

    @pytest.mark.asyncio
    async def test_unlike_without_like_is_not_found(self, unit_env):
        """Removing a missing like should raise NotFoundError."""
        user_repo = await unit_env.get(UserRepository)
        post_service = await unit_env.get(PostService)
        like_service = await unit_env.get(LikeService)
        author = await make_user(user_repo, "alice")
        post = await post_service.create_post(author.id, "Like me")

        with pytest.raises(NotFoundError):
            await like_service.unlike_post(post.id, author.id)

    @pytest.mark.asyncio
    async def test_like_missing_post_is_not_found(self, unit_env):
        """Liking a post that does not exist should raise NotFoundError."""
        user_repo = await unit_env.get(UserRepository)
        like_service = await unit_env.get(LikeService)
        fan = await make_user(user_repo, "bob")

        with pytest.raises(NotFoundError):
            await like_service.like_post(PostId("0" * 32), fan.id)


class TestCommentService:
    """Tests for CommentService."""

    @pytest.mark.asyncio
    async def test_comment_counts_and_notifies(self, unit_env):
        """A comment should bump comments_count and notify the post author."""
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        author = await make_user(user_repo, "alice")
        commenter = await make_user(user_repo, "bob")
        post = await post_service.create_post(author.id, "Discuss")

        comment = await comment_service.create_comment(post.id, commenter.id, "Nice!")

        assert comment.id is not None
        assert (await post_repo.find_by_id(post.id)).comments_count == 1
        notifications = await notification_repo.list_for_recipient(
            author.id, skip=0, limit=10
        )
        assert [n.type for n in notifications] == [NotificationType.COMMENT]

    @pytest.mark.asyncio
    async def test_only_author_can_delete_comment(self, unit_env):
        """Deleting someone else's comment should raise NotAuthorizedError."""
        user_repo = await unit_env.get(UserRepository)
        post_repo = await unit_env.get(PostRepository)
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        author = await make_user(user_repo, "alice")
        commenter = await make_user(user_repo, "bob")
        post = await post_service.create_post(author.id, "Discuss")
        comment = await comment_service.create_comment(post.id, commenter.id, "Nice!")

        with pytest.raises(NotAuthorizedError):
            await comment_service.delete_comment(comment.id, author.id)

        await comment_service.delete_comment(comment.id, commenter.id)
        assert (await post_repo.find_by_id(post.id)).comments_count == 0

    @pytest.mark.asyncio
    async def test_comment_like_stats(self, unit_env):
        """Like stats should report counts and the viewer's liked set."""
        user_repo = await unit_env.get(UserRepository)
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        author = await make_user(user_repo, "alice")
        viewer = await make_user(user_repo, "bob")
        post = await post_service.create_post(author.id, "Discuss")
        first = await comment_service.create_comment(post.id, author.id, "First")
        second = await comment_service.create_comment(post.id, author.id, "Second")
        await comment_service.like_comment(first.id, viewer.id)
        await comment_service.like_comment(first.id, author.id)

        counts, liked = await comment_service.like_stats(
            [first.id, second.id], viewer.id
        )

        assert counts.get(first.id) == 2
        assert counts.get(second.id, 0) == 0
        assert liked == {first.id}
        with pytest.raises(ConflictError):
            await comment_service.like_comment(first.id, viewer.id)


class TestFollowService:
    """Tests for FollowService."""

    @pytest.mark.asyncio
    async def test_follow_updates_counters(self, unit_env):
        """Following should bump both users' counters and notify."""
        user_repo = await unit_env.get(UserRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        follow_service = await unit_env.get(FollowService)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")

        await follow_service.follow(alice.id, bob.id)

        assert (await user_repo.find_by_id(alice.id)).following_count == 1
        assert (await user_repo.find_by_id(bob.id)).followers_count == 1
        assert [u.id for u in await follow_service.followers(bob.id)] == [alice.id]
        assert [u.id for u in await follow_service.following(alice.id)] == [bob.id]
        notifications = await notification_repo.list_for_recipient(
            bob.id, skip=0, limit=10
        )
        assert notifications[0].type == NotificationType.FOLLOW

    @pytest.mark.asyncio
    async def test_cannot_follow_self(self, unit_env):
        """Self-follow should raise BusinessRuleViolationError."""
        user_repo = await unit_env.get(UserRepository)
        follow_service = await unit_env.get(FollowService)
        alice = await make_user(user_repo, "alice")

        with pytest.raises(BusinessRuleViolationError):
            await follow_service.follow(alice.id, alice.id)

    @pytest.mark.asyncio
    async def test_follow_twice_conflicts_and_unfollow_restores(self, unit_env):
        """Duplicate follows conflict and unfollow resets counters."""
        user_repo = await unit_env.get(UserRepository)
        follow_service = await unit_env.get(FollowService)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        await follow_service.follow(alice.id, bob.id)

        with pytest.raises(ConflictError):
            await follow_service.follow(alice.id, bob.id)

        await follow_service.unfollow(alice.id, bob.id)
        assert (await user_repo.find_by_id(bob.id)).followers_count == 0
        with pytest.raises(NotFoundError):
            await follow_service.unfollow(alice.id, bob.id)


class TestFriendService:
    """Tests for FriendService."""

    @pytest.mark.asyncio
    async def test_request_accept_and_remove(self, unit_env):
        """A full friendship lifecycle."""
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        friend_service = await unit_env.get(FriendService)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")

        # Act
        request = await friend_service.send_request(alice.id, bob.id)
        pending = await friend_service.pending_requests(bob.id)
        accepted = await friend_service.respond(
            request.id, bob.id, FriendRequestStatus.ACCEPTED
        )

        # Assert
        assert [r.id for r in pending] == [request.id]
        assert accepted.status == FriendRequestStatus.ACCEPTED
        assert [u.id for u in await friend_service.friends(alice.id)] == [bob.id]
        assert [u.id for u in await friend_service.friends(bob.id)] == [alice.id]

        await friend_service.remove_friend(bob.id, alice.id)
        assert await friend_service.friends(alice.id) == []

    @pytest.mark.asyncio
    async def test_reverse_request_while_pending_conflicts(self, unit_env):
        """Only one request may exist per pair, in either direction."""
        user_repo = await unit_env.get(UserRepository)
        friend_service = await unit_env.get(FriendService)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        await friend_service.send_request(alice.id, bob.id)

        with pytest.raises(ConflictError):
            await friend_service.send_request(bob.id, alice.id)

    @pytest.mark.asyncio
    async def test_only_receiver_can_respond(self, unit_env):
        """The sender cannot accept their own request."""
        user_repo = await unit_env.get(UserRepository)
        friend_service = await unit_env.get(FriendService)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        request = await friend_service.send_request(alice.id, bob.id)

        with pytest.raises(NotAuthorizedError):
            await friend_service.respond(
                request.id, alice.id, FriendRequestStatus.ACCEPTED
            )

    @pytest.mark.asyncio
    async def test_pending_is_not_a_valid_answer(self, unit_env):
        """Responding with PENDING should be rejected."""
        user_repo = await unit_env.get(UserRepository)
        friend_service = await unit_env.get(FriendService)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        request = await friend_service.send_request(alice.id, bob.id)

        with pytest.raises(BusinessRuleViolationError):
            await friend_service.respond(request.id, bob.id, FriendRequestStatus.PENDING)

    @pytest.mark.asyncio
    async def test_rejected_request_can_be_resent(self, unit_env):
        """A rejection does not block a later request."""
        user_repo = await unit_env.get(UserRepository)
        friend_service = await unit_env.get(FriendService)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        request = await friend_service.send_request(alice.id, bob.id)
        await friend_service.respond(request.id, bob.id, FriendRequestStatus.REJECTED)

        again = await friend_service.send_request(alice.id, bob.id)

        assert again.status == FriendRequestStatus.PENDING

    @pytest.mark.asyncio
    async def test_cannot_befriend_self(self, unit_env):
        """Requests to oneself should raise BusinessRuleViolationError."""
        user_repo = await unit_env.get(UserRepository)
        friend_service = await unit_env.get(FriendService)
        alice = await make_user(user_repo, "alice")

        with pytest.raises(BusinessRuleViolationError):
            await friend_service.send_request(alice.id, alice.id)


class TestSavedPostService:
    """Tests for SavedPostService."""

    @pytest.mark.asyncio
    async def test_save_list_and_unsave(self, unit_env):
        """Saved posts are listed most recent first and can be removed."""
        user_repo = await unit_env.get(UserRepository)
        post_service = await unit_env.get(PostService)
        saved_service = await unit_env.get(SavedPostService)
        alice = await make_user(user_repo, "alice")
        first = await post_service.create_post(alice.id, "First")
        second = await post_service.create_post(alice.id, "Second")

        await saved_service.save(alice.id, first.id)
        await saved_service.save(alice.id, second.id)

        assert [p.id for p in await saved_service.saved_posts(alice.id)] == [
            second.id,
            first.id,
        ]
        with pytest.raises(ConflictError):
            await saved_service.save(alice.id, first.id)

        await saved_service.unsave(alice.id, first.id)
        assert [p.id for p in await saved_service.saved_posts(alice.id)] == [second.id]
        with pytest.raises(NotFoundError):
            await saved_service.unsave(alice.id, first.id)

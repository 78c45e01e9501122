"""Unit tests for feed, comment, story and notification use cases."""

import pytest

from social.application.usecase.comment.get_comments import (
    GetCommentsRequest,
    GetCommentsUseCase,
)
from social.application.usecase.feed import GetFeedRequest, GetFeedUseCase
from social.application.usecase.notification import (
    GroupedNotificationsRequest,
    GroupedNotificationsUseCase,
    ListNotificationsRequest,
    ListNotificationsUseCase,
)
from social.application.usecase.story import ListStoriesRequest, ListStoriesUseCase
from social.domain.repository import UserRepository
from social.domain.service import (
    CommentService,
    FollowService,
    LikeService,
    PostService,
    SavedPostService,
    StoryService,
)
from social.domain.value import StoryItemType
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetFeedUseCase:
    """Tests for GetFeedUseCase."""

    @pytest.mark.asyncio
    async def test_feed_marks_viewer_likes_and_saves(self, unit_env):
        """Feed items carry the author and the viewer's like and save state."""
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        post_service = await unit_env.get(PostService)
        like_service = await unit_env.get(LikeService)
        saved_service = await unit_env.get(SavedPostService)
        use_case = await unit_env.get(GetFeedUseCase)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        older = await post_service.create_post(alice.id, "Older post")
        newer = await post_service.create_post(alice.id, "Newer post")
        await like_service.like_post(older.id, bob.id)
        await saved_service.save(bob.id, newer.id)

        # Act
        response = await use_case.execute(GetFeedRequest(user_id=bob.id))

        # Assert
        assert [p.id for p in response.posts] == [newer.id, older.id]
        by_id = {p.id: p for p in response.posts}
        assert by_id[older.id].is_liked and not by_id[older.id].is_saved
        assert by_id[newer.id].is_saved and not by_id[newer.id].is_liked
        assert by_id[newer.id].author.username == "alice"
        assert response.meta.total_items == 2
        assert response.meta.total_pages == 1

    @pytest.mark.asyncio
    async def test_feed_pagination_meta(self, unit_env):
        """Page metadata reflects totals and neighbours."""
        user_repo = await unit_env.get(UserRepository)
        post_service = await unit_env.get(PostService)
        use_case = await unit_env.get(GetFeedUseCase)
        alice = await make_user(user_repo, "alice")
        for i in range(5):
            await post_service.create_post(alice.id, f"Post {i}")

        response = await use_case.execute(
            GetFeedRequest(user_id=alice.id, page=2, limit=2)
        )

        assert len(response.posts) == 2
        assert response.meta.current_page == 2
        assert response.meta.total_pages == 3
        assert response.meta.has_next_page
        assert response.meta.has_previous_page
        dumped = response.meta.model_dump(by_alias=True)
        assert dumped["itemsPerPage"] == 2

    @pytest.mark.asyncio
    async def test_feed_limit_is_capped(self, unit_env):
        """Oversized page sizes are capped at 50."""
        user_repo = await unit_env.get(UserRepository)
        use_case = await unit_env.get(GetFeedUseCase)
        alice = await make_user(user_repo, "alice")

        response = await use_case.execute(GetFeedRequest(user_id=alice.id, limit=500))

        assert response.meta.items_per_page == 50
        assert response.meta.total_pages == 0


class TestGetCommentsUseCase:
    """Tests for GetCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_comments_carry_author_and_like_state(self, unit_env):
        """Comments are oldest first with author, like count and viewer state."""
        user_repo = await unit_env.get(UserRepository)
        post_service = await unit_env.get(PostService)
        comment_service = await unit_env.get(CommentService)
        use_case = await unit_env.get(GetCommentsUseCase)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        post = await post_service.create_post(alice.id, "Discuss")
        first = await comment_service.create_comment(post.id, bob.id, "First!")
        await comment_service.create_comment(post.id, alice.id, "Second")
        await comment_service.like_comment(first.id, alice.id)

        response = await use_case.execute(
            GetCommentsRequest(post_id=post.id, user_id=alice.id)
        )
        anonymous = await use_case.execute(GetCommentsRequest(post_id=post.id))

        assert [c.content for c in response.comments] == ["First!", "Second"]
        assert response.comments[0].author.username == "bob"
        assert response.comments[0].likes_count == 1
        assert response.comments[0].is_liked
        assert not anonymous.comments[0].is_liked


class TestListStoriesUseCase:
    """Tests for ListStoriesUseCase."""

    @pytest.mark.asyncio
    async def test_viewer_story_is_split_out(self, unit_env):
        """The viewer's newest story is returned apart from the tray."""
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        story_service = await unit_env.get(StoryService)
        use_case = await unit_env.get(ListStoriesUseCase)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        await story_service.create_story(alice.id, "https://img/a1.jpg", StoryItemType.IMAGE)
        latest = await story_service.create_story(
            alice.id, "https://img/a2.jpg", StoryItemType.IMAGE
        )
        bobs = await story_service.create_story(
            bob.id, "https://img/b.mp4", StoryItemType.VIDEO
        )
        await story_service.mark_seen(bobs.id, alice.id)

        # Act
        response = await use_case.execute(ListStoriesRequest(user_id=alice.id))

        # Assert
        assert response.current_user_story.id == latest.id
        assert [s.id for s in response.stories] == [bobs.id]
        assert response.stories[0].has_unseen_items is False
        assert response.stories[0].author.username == "bob"
        assert "currentUserStory" in response.model_dump(by_alias=True)

    @pytest.mark.asyncio
    async def test_anonymous_viewer_sees_everything_unseen(self, unit_env):
        """Without a viewer all stories are listed and unseen."""
        user_repo = await unit_env.get(UserRepository)
        story_service = await unit_env.get(StoryService)
        use_case = await unit_env.get(ListStoriesUseCase)
        alice = await make_user(user_repo, "alice")
        await story_service.create_story(alice.id, "https://img/a.jpg", StoryItemType.IMAGE)

        response = await use_case.execute(ListStoriesRequest())

        assert response.current_user_story is None
        assert len(response.stories) == 1
        assert response.stories[0].has_unseen_items


class TestNotificationUseCases:
    """Tests for notification listing use cases."""

    @pytest.mark.asyncio
    async def test_list_includes_actor(self, unit_env):
        """Listed notifications embed the acting user."""
        user_repo = await unit_env.get(UserRepository)
        follow_service = await unit_env.get(FollowService)
        use_case = await unit_env.get(ListNotificationsUseCase)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        await follow_service.follow(bob.id, alice.id)

        response = await use_case.execute(ListNotificationsRequest(user_id=alice.id))

        assert len(response.notifications) == 1
        assert response.notifications[0].type == "follow"
        assert response.notifications[0].actor.id == bob.id
        assert response.meta.items_per_page == 20

    @pytest.mark.asyncio
    async def test_grouped_serializes_camel_case(self, unit_env):
        """Grouped notifications use thisWeek and unreadCount keys."""
        user_repo = await unit_env.get(UserRepository)
        follow_service = await unit_env.get(FollowService)
        use_case = await unit_env.get(GroupedNotificationsUseCase)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        await follow_service.follow(bob.id, alice.id)

        response = await use_case.execute(GroupedNotificationsRequest(user_id=alice.id))
        dumped = response.model_dump(by_alias=True)

        assert dumped["unreadCount"] == 1
        assert set(dumped) == {"today", "yesterday", "thisWeek", "older", "unreadCount"}
        assert len(response.today) == 1

"""Unit tests for StoryService and NotificationService."""

from datetime import datetime, timedelta, timezone

import pytest

from social.domain.error import NotFoundError
from social.domain.model import Notification, Story, StoryItem
from social.domain.repository import (
    NotificationRepository,
    StoryRepository,
    UserRepository,
)
from social.domain.service import NotificationService, StoryService
from social.domain.value import (
    NotificationType,
    StoryId,
    StoryItemId,
    StoryItemType,
    UserId,
)
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def expired_story(user_id: UserId) -> Story:
    created = datetime.now(timezone.utc) - timedelta(hours=30)
    return Story(
        id=StoryId("e" * 32),
        user_id=user_id,
        items=[
            StoryItem(
                id=StoryItemId("f" * 32),
                type=StoryItemType.IMAGE,
                url="https://img/old.jpg",
                created_at=created,
            )
        ],
        created_at=created,
        expires_at=created + timedelta(hours=24),
    )


class TestStoryService:
    """Tests for StoryService."""

    @pytest.mark.asyncio
    async def test_create_story_expires_in_24_hours(self, unit_env):
        """A new story has one five-second item and a 24h lifetime."""
        user_repo = await unit_env.get(UserRepository)
        story_service = await unit_env.get(StoryService)
        alice = await make_user(user_repo, "alice")

        story = await story_service.create_story(
            alice.id, "https://img/1.jpg", StoryItemType.IMAGE
        )

        assert len(story.items) == 1
        assert story.items[0].duration == 5
        assert story.expires_at - story.created_at == timedelta(hours=24)
        assert [s.id for s in await story_service.active_stories()] == [story.id]

    @pytest.mark.asyncio
    async def test_expired_story_is_hidden_and_purged(self, unit_env):
        """Expired stories are not listed or fetchable, and purge removes them."""
        user_repo = await unit_env.get(UserRepository)
        story_repo = await unit_env.get(StoryRepository)
        story_service = await unit_env.get(StoryService)
        alice = await make_user(user_repo, "alice")
        old = await story_repo.create(expired_story(alice.id))
        fresh = await story_service.create_story(
            alice.id, "https://img/new.jpg", StoryItemType.IMAGE
        )

        assert [s.id for s in await story_service.active_stories()] == [fresh.id]
        with pytest.raises(NotFoundError):
            await story_service.get_story(old.id)

        assert await story_service.purge_expired() == 1
        assert await story_repo.find_by_id(old.id) is None
        assert await story_repo.find_by_id(fresh.id) is not None

    @pytest.mark.asyncio
    async def test_mark_seen_is_idempotent(self, unit_env):
        """Marking a story seen twice records it once."""
        user_repo = await unit_env.get(UserRepository)
        story_service = await unit_env.get(StoryService)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        story = await story_service.create_story(
            alice.id, "https://img/1.jpg", StoryItemType.IMAGE
        )

        await story_service.mark_seen(story.id, bob.id)
        await story_service.mark_seen(story.id, bob.id)

        assert await story_service.seen_story_ids(bob.id, [story.id]) == {story.id}
        assert await story_service.seen_story_ids(alice.id, [story.id]) == set()

    @pytest.mark.asyncio
    async def test_react_notifies_author(self, unit_env):
        """A reaction should notify the story author."""
        user_repo = await unit_env.get(UserRepository)
        notification_repo = await unit_env.get(NotificationRepository)
        story_service = await unit_env.get(StoryService)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        story = await story_service.create_story(
            alice.id, "https://img/1.jpg", StoryItemType.IMAGE
        )

        reaction = await story_service.react(story.id, bob.id, "🔥")

        assert reaction.reaction == "🔥"
        notifications = await notification_repo.list_for_recipient(
            alice.id, skip=0, limit=10
        )
        assert notifications[0].type == NotificationType.STORY_REACTION
        assert notifications[0].preview_image_url == "https://img/1.jpg"

    @pytest.mark.asyncio
    async def test_react_to_missing_story_is_not_found(self, unit_env):
        """Reacting to an unknown story should raise NotFoundError."""
        user_repo = await unit_env.get(UserRepository)
        story_service = await unit_env.get(StoryService)
        bob = await make_user(user_repo, "bob")

        with pytest.raises(NotFoundError):
            await story_service.react(StoryId("0" * 32), bob.id, "👍")


class TestNotificationService:
    """Tests for NotificationService."""

    async def _store(
        self, repo: NotificationRepository, recipient: UserId, actor: UserId, at: datetime
    ) -> Notification:
        return await repo.create(
            Notification(
                recipient_id=recipient,
                actor_id=actor,
                type=NotificationType.FOLLOW,
                message="Someone started following you",
                created_at=at,
            )
        )

    @pytest.mark.asyncio
    async def test_grouping_by_age(self, unit_env):
        """Notifications fall into today, yesterday, this week and older."""
        # Arrange
        user_repo = await unit_env.get(UserRepository)
        repo = await unit_env.get(NotificationRepository)
        service = await unit_env.get(NotificationService)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        now = datetime(2026, 3, 12, 15, 0, tzinfo=timezone.utc)

        today = await self._store(repo, alice.id, bob.id, now - timedelta(hours=2))
        yesterday = await self._store(repo, alice.id, bob.id, now - timedelta(days=1))
        this_week = await self._store(repo, alice.id, bob.id, now - timedelta(days=4))
        older = await self._store(repo, alice.id, bob.id, now - timedelta(days=30))

        # Act
        grouped = await service.grouped(alice.id, now=now)

        # Assert
        assert [n.id for n in grouped.today] == [today.id]
        assert [n.id for n in grouped.yesterday] == [yesterday.id]
        assert [n.id for n in grouped.this_week] == [this_week.id]
        assert [n.id for n in grouped.older] == [older.id]
        assert grouped.unread_count == 4

    @pytest.mark.asyncio
    async def test_pagination_and_read_state(self, unit_env):
        """Pages are newest first and read markers lower the unread count."""
        user_repo = await unit_env.get(UserRepository)
        repo = await unit_env.get(NotificationRepository)
        service = await unit_env.get(NotificationService)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        base = datetime.now(timezone.utc) - timedelta(hours=1)
        stored = [
            await self._store(repo, alice.id, bob.id, base + timedelta(minutes=i))
            for i in range(5)
        ]

        page, total = await service.list_page(alice.id, page=2, limit=2)

        assert total == 5
        assert [n.id for n in page] == [stored[2].id, stored[1].id]

        await service.mark_read(stored[0].id, alice.id)
        assert await service.unread_count(alice.id) == 4
        assert await service.mark_all_read(alice.id) == 4
        assert await service.unread_count(alice.id) == 0

    @pytest.mark.asyncio
    async def test_mark_read_is_scoped_to_recipient(self, unit_env):
        """Marking another user's notification should raise NotFoundError."""
        user_repo = await unit_env.get(UserRepository)
        repo = await unit_env.get(NotificationRepository)
        service = await unit_env.get(NotificationService)
        alice = await make_user(user_repo, "alice")
        bob = await make_user(user_repo, "bob")
        notification = await self._store(
            repo, alice.id, bob.id, datetime.now(timezone.utc)
        )

        with pytest.raises(NotFoundError):
            await service.mark_read(notification.id, bob.id)
        assert await service.unread_count(alice.id) == 1

"""PostgreSQL implementation of StoryActivity repository."""

from typing import Sequence

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from social.domain.model import StoryReaction, StorySeen
from social.domain.repository import StoryActivityRepository
from social.domain.value import StoryId, UserId
from social.persistence.mappers import row_to_story_reaction
from social.persistence.tables import story_reactions_table, story_seen_table


class PostgresStoryActivityRepository(StoryActivityRepository):
    """Seen markers and reactions on stories."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def mark_seen(self, seen: StorySeen) -> bool:
        """Record a view, ignoring repeats.

        Returns:
            True if this was the first view by the user
        """
        stmt = (
            insert(story_seen_table)
            .values(story_id=seen.story_id, user_id=seen.user_id, seen_at=seen.seen_at)
            .on_conflict_do_nothing(constraint="uq_story_seen_story_user")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def find_seen_story_ids(
        self, user_id: UserId, story_ids: Sequence[StoryId]
    ) -> set[StoryId]:
        if not story_ids:
            return set()

        stmt = select(story_seen_table.c.story_id).where(
            and_(
                story_seen_table.c.user_id == user_id,
                story_seen_table.c.story_id.in_(list(story_ids)),
            )
        )
        result = await self.session.execute(stmt)
        return {StoryId(story_id) for story_id in result.scalars().all()}

    async def add_reaction(self, reaction: StoryReaction) -> StoryReaction:
        stmt = (
            insert(story_reactions_table)
            .values(
                story_id=reaction.story_id,
                user_id=reaction.user_id,
                reaction=reaction.reaction,
                created_at=reaction.created_at,
            )
            .returning(*story_reactions_table.c)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return row_to_story_reaction(dict(result.mappings().one()))

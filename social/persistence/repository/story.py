"""Document store implementation of Story repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, insert, select

from social.domain.model import Story
from social.domain.repository import StoryRepository
from social.domain.value import StoryId
from social.persistence.database import DocumentSession
from social.persistence.documents import story_documents
from social.persistence.mappers import document_to_story, story_to_document


class DocumentStoryRepository(StoryRepository):
    """StoryRepository backed by the `story_documents` collection."""

    def __init__(self, session: DocumentSession) -> None:
        """Initialize repository with a document store session.

        Args:
            session: Document store session
        """
        self.session = session

    async def find_by_id(self, story_id: StoryId) -> Optional[Story]:
        stmt = select(story_documents).where(story_documents.c.id == story_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return document_to_story(dict(row)) if row else None

    async def list_active(self, now: datetime) -> list[Story]:
        stmt = (
            select(story_documents)
            .where(story_documents.c.expires_at > now)
            .order_by(story_documents.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [document_to_story(dict(row)) for row in result.mappings().all()]

    async def create(self, story: Story) -> Story:
        stmt = insert(story_documents).values(**story_to_document(story))
        await self.session.execute(stmt)
        await self.session.flush()
        return story

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(story_documents).where(story_documents.c.expires_at <= now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

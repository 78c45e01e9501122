"""PostgreSQL implementation of Notification repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from social.domain.model import Notification
from social.domain.repository import NotificationRepository
from social.domain.value import NotificationId, UserId
from social.persistence.mappers import notification_to_dict, row_to_notification
from social.persistence.tables import notifications_table

NEWEST_FIRST = (
    notifications_table.c.created_at.desc(),
    notifications_table.c.id.desc(),
)


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, notification: Notification) -> Notification:
        """Insert a notification.

        Runs in a savepoint; notifications are secondary writes and a
        failure here must not abort the request transaction.
        """
        stmt = (
            insert(notifications_table)
            .values(**notification_to_dict(notification))
            .returning(*notifications_table.c)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.mappings().one()
        return row_to_notification(dict(row))

    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        stmt = select(notifications_table).where(
            notifications_table.c.id == notification_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_notification(dict(row)) if row else None

    async def list_for_recipient(
        self, recipient_id: UserId, skip: int, limit: int
    ) -> list[Notification]:
        stmt = (
            select(notifications_table)
            .where(notifications_table.c.recipient_id == recipient_id)
            .order_by(*NEWEST_FIRST)
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_notification(dict(row)) for row in result.mappings().all()]

    async def count_for_recipient(self, recipient_id: UserId) -> int:
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(notifications_table.c.recipient_id == recipient_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def list_between(
        self,
        recipient_id: UserId,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[Notification]:
        """List notifications created in `[start, end)`, newest first."""
        criteria = [notifications_table.c.recipient_id == recipient_id]
        if start is not None:
            criteria.append(notifications_table.c.created_at >= start)
        if end is not None:
            criteria.append(notifications_table.c.created_at < end)

        stmt = (
            select(notifications_table)
            .where(and_(*criteria))
            .order_by(*NEWEST_FIRST)
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return [row_to_notification(dict(row)) for row in result.mappings().all()]

    async def count_unread(self, recipient_id: UserId) -> int:
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(
                and_(
                    notifications_table.c.recipient_id == recipient_id,
                    notifications_table.c.is_read.is_(False),
                )
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def mark_read(
        self, notification_id: NotificationId, recipient_id: UserId
    ) -> bool:
        """Mark a notification read, scoped to its recipient.

        Returns:
            False if the notification does not exist or belongs to someone else
        """
        stmt = (
            update(notifications_table)
            .where(
                and_(
                    notifications_table.c.id == notification_id,
                    notifications_table.c.recipient_id == recipient_id,
                )
            )
            .values(is_read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def mark_all_read(self, recipient_id: UserId) -> int:
        stmt = (
            update(notifications_table)
            .where(
                and_(
                    notifications_table.c.recipient_id == recipient_id,
                    notifications_table.c.is_read.is_(False),
                )
            )
            .values(is_read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

"""PostgreSQL implementation of User repository."""

from typing import Optional, Sequence

from sqlalchemy import case, delete, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from social.domain.error import StorageError
from social.domain.model import User
from social.domain.repository import UserRepository
from social.domain.value import UserCounter, UserId
from social.persistence.mappers import row_to_user, user_to_dict
from social.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository.

    Uniqueness violations surface as IntegrityError. Any other database
    failure is raised as StorageError.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Executable):
        try:
            return await self.session.execute(stmt)
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            raise StorageError("Credential store unavailable") from e

    async def _find_one(self, *criteria) -> Optional[User]:
        stmt = select(users_table).where(*criteria)
        result = await self._execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        return await self._find_one(users_table.c.id == user_id)

    async def find_by_external_subject_id(self, subject_id: str) -> Optional[User]:
        return await self._find_one(users_table.c.firebase_uid == subject_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self._find_one(users_table.c.email == email)

    async def find_by_username(self, username: str) -> Optional[User]:
        return await self._find_one(users_table.c.username == username)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        if not user_ids:
            return []

        stmt = select(users_table).where(users_table.c.id.in_(list(user_ids)))
        result = await self._execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def list_users(
        self, limit: int, exclude: Optional[UserId] = None
    ) -> list[User]:
        stmt = select(users_table).order_by(users_table.c.id).limit(limit)
        if exclude is not None:
            stmt = stmt.where(users_table.c.id != exclude)
        result = await self._execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def search(self, query: str, limit: int) -> list[User]:
        """Case-insensitive substring search.

        Args:
            query: Search text, LIKE wildcards are matched literally
            limit: Maximum number of results

        Returns:
            Matching users ordered by ID
        """
        escaped = (
            query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        )
        pattern = f"%{escaped}%"
        stmt = (
            select(users_table)
            .where(
                or_(
                    users_table.c.display_name.ilike(pattern, escape="\\"),
                    users_table.c.username.ilike(pattern, escape="\\"),
                    users_table.c.email.ilike(pattern, escape="\\"),
                )
            )
            .order_by(users_table.c.id)
            .limit(limit)
        )
        result = await self._execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def create(self, user: User) -> User:
        """Insert a new user.

        Runs in a savepoint so a uniqueness violation leaves the
        surrounding transaction usable for a retry.

        Args:
            user: User without an id

        Returns:
            Stored user with the assigned id

        Raises:
            IntegrityError: If username, email or subject id is taken
        """
        stmt = (
            insert(users_table)
            .values(**user_to_dict(user))
            .returning(*users_table.c)
        )
        async with self.session.begin_nested():
            result = await self._execute(stmt)
            row = result.mappings().one()
        return row_to_user(dict(row))

    async def update(self, user: User) -> User:
        """Persist changes to an existing user.

        Counters are left alone; they only change through adjust_counter.

        Args:
            user: User with an id

        Returns:
            Stored user

        Raises:
            IntegrityError: If the change collides with another user
        """
        values = user_to_dict(user)
        for counter in UserCounter:
            values.pop(counter.value, None)
        values.pop("created_at", None)
        values["updated_at"] = func.now()

        stmt = (
            update(users_table)
            .where(users_table.c.id == user.id)
            .values(**values)
            .returning(*users_table.c)
        )
        async with self.session.begin_nested():
            result = await self._execute(stmt)
            row = result.mappings().first()
        if row is None:
            raise StorageError(f"User {user.id} vanished during update")
        return row_to_user(dict(row))

    async def delete(self, user_id: UserId) -> bool:
        stmt = delete(users_table).where(users_table.c.id == user_id)
        result = await self._execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def adjust_counter(
        self, user_id: UserId, counter: UserCounter, delta: int
    ) -> None:
        """Atomically add `delta` to a counter (minimum 0).

        Args:
            user_id: User ID to update
            counter: Counter column
            delta: Amount to add
        """
        column = users_table.c[counter.value]
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values({column: case((column + delta > 0, column + delta), else_=0)})
        )
        async with self.session.begin_nested():
            await self._execute(stmt)

"""In-memory user repository for testing."""

from itertools import count
from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from social.domain.model.common import utc_now
from social.domain.model.user import User
from social.domain.repository.user import UserRepository
from social.domain.value import UserCounter, UserId


def duplicate(constraint: str) -> IntegrityError:
    """IntegrityError shaped like the one the database raises."""
    return IntegrityError(f"duplicate key violates {constraint}", None, Exception())


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Enforces the same unique keys as the users table. Methods never
    yield between the uniqueness check and the write, so concurrent
    tasks see the same collisions a database would report.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}
        self._ids = count(1)

    def _check_unique(self, user: User) -> None:
        for other in self._users.values():
            if other.id == user.id:
                continue
            if other.username == user.username:
                raise duplicate("uq_users_username")
            if user.email is not None and other.email == user.email:
                raise duplicate("uq_users_email")
            if (
                user.firebase_uid is not None
                and other.firebase_uid == user.firebase_uid
            ):
                raise duplicate("uq_users_firebase_uid")

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def find_by_external_subject_id(self, subject_id: str) -> Optional[User]:
        for user in self._users.values():
            if user.firebase_uid == subject_id:
                return user
        return None

    async def find_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username.root == username:
                return user
        return None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        return [self._users[uid] for uid in user_ids if uid in self._users]

    async def list_users(
        self, limit: int, exclude: Optional[UserId] = None
    ) -> list[User]:
        users = [u for uid, u in sorted(self._users.items()) if uid != exclude]
        return users[:limit]

    async def search(self, query: str, limit: int) -> list[User]:
        needle = query.lower()
        matches = [
            user
            for _, user in sorted(self._users.items())
            if needle in user.display_name.lower()
            or needle in user.username.root.lower()
            or needle in (user.email or "").lower()
        ]
        return matches[:limit]

    async def create(self, user: User) -> User:
        self._check_unique(user)
        stored = user.model_copy(update={"id": UserId(next(self._ids))})
        self._users[stored.id] = stored
        return stored

    async def update(self, user: User) -> User:
        """Persist changes, keeping stored counters like the SQL update does."""
        current = self._users[user.id]
        self._check_unique(user)
        stored = user.model_copy(
            update={
                **{c.value: getattr(current, c.value) for c in UserCounter},
                "created_at": current.created_at,
                "updated_at": utc_now(),
            }
        )
        self._users[user.id] = stored
        return stored

    async def delete(self, user_id: UserId) -> bool:
        return self._users.pop(user_id, None) is not None

    async def adjust_counter(
        self, user_id: UserId, counter: UserCounter, delta: int
    ) -> None:
        user = self._users.get(user_id)
        if user:
            value = max(0, getattr(user, counter.value) + delta)
            self._users[user_id] = user.model_copy(update={counter.value: value})

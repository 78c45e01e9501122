"""User repository interface (credential store)."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from social.domain.model.user import User
from social.domain.value import UserCounter, UserId


class UserRepository(ABC):
    """Repository for the User aggregate.

    The store enforces uniqueness of username, email and external subject
    id. Writes that violate one of them raise `sqlalchemy.exc.IntegrityError`
    so callers can tell a collision apart from a storage fault.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_external_subject_id(self, subject_id: str) -> Optional[User]:
        """Find a user linked to an identity-provider subject.

        Args:
            subject_id: Subject id asserted by the identity provider

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username.

        Args:
            username: The user's username

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once (batch query).

        Args:
            user_ids: IDs to look up, unknown IDs are skipped

        Returns:
            Users found, in no particular order
        """
        pass

    @abstractmethod
    async def list_users(
        self, limit: int, exclude: Optional[UserId] = None
    ) -> list[User]:
        """List users in creation order.

        Args:
            limit: Maximum number of users
            exclude: User to leave out (usually the caller)

        Returns:
            Up to `limit` users
        """
        pass

    @abstractmethod
    async def search(self, query: str, limit: int) -> list[User]:
        """Case-insensitive substring search on display name, username and email.

        Args:
            query: Search text
            limit: Maximum number of results

        Returns:
            Matching users
        """
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: User without an id

        Returns:
            The stored user with its assigned id

        Raises:
            IntegrityError: If username, email or subject id is taken
        """
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Persist changes to an existing user.

        Args:
            user: User with an id

        Returns:
            The stored user

        Raises:
            IntegrityError: If the change collides with another user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete a user.

        Returns:
            True if a user was deleted
        """
        pass

    @abstractmethod
    async def adjust_counter(
        self, user_id: UserId, counter: UserCounter, delta: int
    ) -> None:
        """Atomically add `delta` to a counter, never going below 0.

        Args:
            user_id: The user's unique identifier
            counter: Which counter to change
            delta: Amount to add (negative to decrement)
        """
        pass

"""User domain service."""

from typing import Any, Sequence

import logfire
from sqlalchemy.exc import IntegrityError

from social.domain.error import ConflictError, NotFoundError
from social.domain.model import User
from social.domain.model.common import utc_now
from social.domain.repository import UserRepository
from social.domain.value import UserCounter, UserId
from social.domain.value.types import Username

from .base import Service


class UserService(Service):
    """Domain service for user profile operations."""

    SUGGESTED_LIMIT = 10
    SEARCH_LIMIT = 20

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=user_id):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=user_id)
                raise NotFoundError("User", str(user_id))
            return user

    async def get_many(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Load several users keyed by id (batch query).

        Args:
            user_ids: User IDs, duplicates allowed

        Returns:
            Mapping of found users
        """
        unique_ids = list(dict.fromkeys(user_ids))
        if not unique_ids:
            return {}
        users = await self.user_repository.find_by_ids(unique_ids)
        return {user.id: user for user in users if user.id is not None}

    async def update_profile(self, user_id: UserId, changes: dict[str, Any]) -> User:
        """Apply a partial profile update.

        Args:
            user_id: User ID
            changes: Fields to change (display_name, username, email, bio,
                avatar_url, is_private)

        Returns:
            Updated user

        Raises:
            NotFoundError: If user not found
            ConflictError: If the new username or email is taken
        """
        with logfire.span(
            "user_service.update_profile", user_id=user_id, fields=sorted(changes)
        ):
            user = await self.get_by_id(user_id)

            if "username" in changes:
                changes["username"] = Username(changes["username"])
                other = await self.user_repository.find_by_username(
                    changes["username"].root
                )
                if other and other.id != user_id:
                    raise ConflictError("Username already taken")

            if changes.get("email"):
                other = await self.user_repository.find_by_email(changes["email"])
                if other and other.id != user_id:
                    raise ConflictError("Email already in use")

            updated = User.model_validate(
                {**user.model_dump(), **changes, "updated_at": utc_now()}
            )
            try:
                saved = await self.user_repository.update(updated)
            except IntegrityError:
                raise ConflictError("Username or email already in use")

            logfire.info("Profile updated", user_id=user_id)
            return saved

    async def delete(self, user_id: UserId) -> None:
        """Delete a user account.

        Issued session tokens remain valid until they expire.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.delete", user_id=user_id):
            if not await self.user_repository.delete(user_id):
                raise NotFoundError("User", str(user_id))
            logfire.info("User deleted", user_id=user_id)

    async def suggested(self, user_id: UserId) -> list[User]:
        """Suggest users to connect with (first registered users, not the caller)."""
        return await self.user_repository.list_users(
            limit=self.SUGGESTED_LIMIT, exclude=user_id
        )

    async def search(self, query: str) -> list[User]:
        """Search users by display name, username or email."""
        with logfire.span("user_service.search"):
            return await self.user_repository.search(query, limit=self.SEARCH_LIMIT)

    async def adjust_counter(
        self, user_id: UserId, counter: UserCounter, delta: int
    ) -> bool:
        """Update a denormalized counter without failing the caller.

        Args:
            user_id: User ID
            counter: Counter to change
            delta: Amount to add

        Returns:
            True if the counter was updated
        """
        return await self._best_effort(
            "user_counter",
            self.user_repository.adjust_counter(user_id, counter, delta),
            user_id=user_id,
            counter=counter.value,
            delta=delta,
        )

"""External identity verification and reconciliation."""

import secrets
from abc import ABC, abstractmethod

import logfire
from sqlalchemy.exc import IntegrityError

from social.domain.error import StorageError
from social.domain.model import User
from social.domain.model.common import utc_now
from social.domain.repository import UserRepository
from social.domain.value import ExternalIdentityClaim
from social.domain.value.types import Username

from .base import Service

USERNAME_SUFFIX_ATTEMPTS = 5


class ExternalIdentityVerifier(ABC):
    """Interface for identity-provider ID token verification."""

    @abstractmethod
    async def verify(self, id_token: str) -> ExternalIdentityClaim:
        """Verify an ID token issued by the identity provider.

        Implementations must bound the time spent (including key fetches).

        Args:
            id_token: Token obtained by the client from the provider SDK

        Returns:
            Verified subject id with optional email and display name

        Raises:
            ProviderError: If the token is invalid or verification fails
        """
        pass


async def available_username(
    user_repository: UserRepository, subject_id: str
) -> Username:
    """Derive an unused username for a new externally identified user.

    The sanitized subject id is preferred. When a local account already
    holds it, a random suffix is added.

    Args:
        user_repository: User repository
        subject_id: External subject id

    Returns:
        Username not held by any user at the time of the lookup
    """
    username = Username.from_subject_id(subject_id)
    for _ in range(USERNAME_SUFFIX_ATTEMPTS):
        if await user_repository.find_by_username(username.root) is None:
            return username
        username = Username.from_subject_id(subject_id, suffix=secrets.token_hex(3))
    return username


class IdentityReconciliationService(Service):
    """Maps a verified external identity onto exactly one local user.

    Resolution order:
    1. A user already linked to the subject id (email and display name are
       refreshed from the claim)
    2. A user with the claimed email (the subject id is linked to it)
    3. Otherwise a new user is created with no password, under a username
       derived from the subject id

    Lookup and write are not atomic. The store's unique constraints on
    subject id and email make a concurrent first login fail on the second
    writer, which is then resolved by repeating the lookup. A username
    taken in between is replaced on the repeated attempt.
    """

    MAX_ATTEMPTS = 2

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize reconciliation service.

        Args:
            user_repository: User repository (credential store)
        """
        self.user_repository = user_repository

    async def reconcile(self, claim: ExternalIdentityClaim) -> User:
        """Find, link or create the local user for a verified claim.

        Args:
            claim: Verified external identity claim

        Returns:
            Persisted user

        Raises:
            StorageError: If the store fails or the lookup retry does not converge
        """
        with logfire.span(
            "identity_service.reconcile", subject_id=claim.subject_id
        ):
            for attempt in range(1, self.MAX_ATTEMPTS + 1):
                user = await self.user_repository.find_by_external_subject_id(
                    claim.subject_id
                )
                if user is not None:
                    return await self._refresh_linked_user(user, claim)

                try:
                    if claim.email:
                        user = await self.user_repository.find_by_email(claim.email)
                        if user is not None:
                            return await self._link_existing_user(user, claim)

                    return await self._create_user(claim)
                except IntegrityError:
                    logfire.warn(
                        "Concurrent first login, retrying lookup",
                        subject_id=claim.subject_id,
                        attempt=attempt,
                    )

            logfire.error(
                "Reconciliation did not converge", subject_id=claim.subject_id
            )
            raise StorageError("Could not resolve user for external identity")

    async def _refresh_linked_user(
        self, user: User, claim: ExternalIdentityClaim
    ) -> User:
        """Case 1: refresh profile fields from the claim."""
        changes: dict = {}

        if claim.email and claim.email != user.email:
            owner = await self.user_repository.find_by_email(claim.email)
            if owner is None or owner.id == user.id:
                changes["email"] = claim.email
            else:
                # Email now belongs to another account, keep the current one
                logfire.warn(
                    "Claimed email owned by another user, not refreshing",
                    user_id=user.id,
                    other_user_id=owner.id,
                )

        display_name = (claim.display_name or "")[:128]
        if display_name and display_name != user.display_name:
            changes["display_name"] = display_name

        if not changes:
            logfire.info("Resolved linked user", user_id=user.id)
            return user

        try:
            updated = await self.user_repository.update(
                user.model_copy(update={**changes, "updated_at": utc_now()})
            )
        except IntegrityError:
            # Lost a race for the email, the link itself is still valid
            logfire.warn("Profile refresh collided, keeping stored user", user_id=user.id)
            return user

        logfire.info(
            "Resolved linked user", user_id=user.id, refreshed=sorted(changes)
        )
        return updated

    async def _link_existing_user(
        self, user: User, claim: ExternalIdentityClaim
    ) -> User:
        """Case 2: attach the subject id to the account owning the email."""
        if user.firebase_uid and user.firebase_uid != claim.subject_id:
            logfire.warn(
                "Replacing external subject link on email match",
                user_id=user.id,
                subject_id=claim.subject_id,
            )

        changes: dict = {"firebase_uid": claim.subject_id, "updated_at": utc_now()}
        linked = await self.user_repository.update(user.model_copy(update=changes))
        logfire.info(
            "Linked external identity to existing user",
            user_id=user.id,
            subject_id=claim.subject_id,
        )
        return linked

    async def _create_user(self, claim: ExternalIdentityClaim) -> User:
        """Case 3: create a passwordless user for the subject."""
        user = User(
            username=await available_username(self.user_repository, claim.subject_id),
            display_name=(claim.display_name or claim.subject_id)[:128],
            email=claim.email,
            firebase_uid=claim.subject_id,
        )
        created = await self.user_repository.create(user)
        logfire.info(
            "Created user for external identity",
            user_id=created.id,
            subject_id=claim.subject_id,
        )
        return created

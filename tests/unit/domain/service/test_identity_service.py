"""Unit tests for IdentityReconciliationService."""

import asyncio

import pytest
from sqlalchemy.exc import IntegrityError

from social.domain.error import StorageError
from social.domain.model import User
from social.domain.service import (
    ExternalIdentityVerifier,
    IdentityReconciliationService,
)
from social.domain.value import ExternalIdentityClaim
from social.domain.value.types import Username
from social.persistence.repository.inmemory import InMemoryUserRepository


def make_service() -> tuple[IdentityReconciliationService, InMemoryUserRepository]:
    user_repo = InMemoryUserRepository()
    return IdentityReconciliationService(user_repo), user_repo


class TestReconcileLinkedUser:
    """Case 1: a user already carries the subject id."""

    @pytest.mark.asyncio
    async def test_returns_linked_user(self):
        """Should resolve to the user linked to the subject id."""
        # Arrange
        service, user_repo = make_service()
        existing = await user_repo.create(
            User(
                username=Username("uid-alice"),
                display_name="Alice",
                email="alice@example.com",
                firebase_uid="uid-alice",
            )
        )

        # Act
        user = await service.reconcile(
            ExternalIdentityClaim(subject_id="uid-alice", email="alice@example.com")
        )

        # Assert
        assert user.id == existing.id

    @pytest.mark.asyncio
    async def test_refreshes_email_and_display_name(self):
        """Claimed email and name should overwrite stale profile values."""
        service, user_repo = make_service()
        existing = await user_repo.create(
            User(
                username=Username("uid-alice"),
                display_name="Old Name",
                email="old@example.com",
                firebase_uid="uid-alice",
            )
        )

        user = await service.reconcile(
            ExternalIdentityClaim(
                subject_id="uid-alice",
                email="new@example.com",
                display_name="Alice Liddell",
            )
        )

        assert user.id == existing.id
        assert user.email == "new@example.com"
        assert user.display_name == "Alice Liddell"
        stored = await user_repo.find_by_id(existing.id)
        assert stored.email == "new@example.com"

    @pytest.mark.asyncio
    async def test_keeps_email_owned_by_another_user(self):
        """Email refresh should be skipped when another account owns it."""
        service, user_repo = make_service()
        linked = await user_repo.create(
            User(
                username=Username("uid-alice"),
                display_name="Alice",
                email="alice@example.com",
                firebase_uid="uid-alice",
            )
        )
        other = await user_repo.create(
            User(
                username=Username("bob"),
                display_name="Bob",
                email="bob@example.com",
                password_hash="$2b$04$hash",
            )
        )

        user = await service.reconcile(
            ExternalIdentityClaim(subject_id="uid-alice", email="bob@example.com")
        )

        assert user.id == linked.id
        assert user.email == "alice@example.com"
        # The email owner is never touched
        assert await user_repo.find_by_id(other.id) == other


class TestReconcileByEmail:
    """Case 2: no subject link, but the email matches an account."""

    @pytest.mark.asyncio
    async def test_links_subject_to_password_account(self):
        """The subject id should be attached to the existing account."""
        # Arrange
        service, user_repo = make_service()
        existing = await user_repo.create(
            User(
                username=Username("alice"),
                display_name="Alice",
                email="alice@example.com",
                password_hash="$2b$04$hash",
            )
        )

        # Act
        user = await service.reconcile(
            ExternalIdentityClaim(subject_id="uid-alice", email="alice@example.com")
        )

        # Assert
        assert user.id == existing.id
        assert user.firebase_uid == "uid-alice"
        assert user.password_hash == "$2b$04$hash"
        assert len(await user_repo.list_users(limit=10)) == 1

    @pytest.mark.asyncio
    async def test_replaces_different_subject_link(self):
        """An email match should overwrite a previously linked subject id."""
        service, user_repo = make_service()
        existing = await user_repo.create(
            User(
                username=Username("alice"),
                display_name="Alice",
                email="alice@example.com",
                firebase_uid="uid-old",
            )
        )

        user = await service.reconcile(
            ExternalIdentityClaim(subject_id="uid-new", email="alice@example.com")
        )

        assert user.id == existing.id
        assert user.firebase_uid == "uid-new"


class TestReconcileNewUser:
    """Case 3: nothing matches, a user is created."""

    @pytest.mark.asyncio
    async def test_creates_passwordless_user(self):
        """A new user should be created from the claim."""
        service, user_repo = make_service()

        user = await service.reconcile(
            ExternalIdentityClaim(
                subject_id="uid-carol",
                email="carol@example.com",
                display_name="Carol",
            )
        )

        assert user.id is not None
        assert user.firebase_uid == "uid-carol"
        assert user.email == "carol@example.com"
        assert user.display_name == "Carol"
        assert user.username.root == "uid-carol"
        assert user.password_hash is None

    @pytest.mark.asyncio
    async def test_claim_without_email_creates_user(self):
        """A claim with no email should skip email matching."""
        service, user_repo = make_service()
        await user_repo.create(
            User(
                username=Username("dave"),
                display_name="Dave",
                email=None,
                password_hash="$2b$04$hash",
            )
        )

        user = await service.reconcile(ExternalIdentityClaim(subject_id="uid-erin"))

        assert user.email is None
        assert user.display_name == "uid-erin"
        assert len(await user_repo.list_users(limit=10)) == 2

    @pytest.mark.asyncio
    async def test_second_login_resolves_same_user(self):
        """Repeating a login should never create a second user."""
        service, user_repo = make_service()
        claim = ExternalIdentityClaim(subject_id="uid-frank", email="frank@example.com")

        first = await service.reconcile(claim)
        second = await service.reconcile(claim)

        assert first.id == second.id
        assert len(await user_repo.list_users(limit=10)) == 1

    @pytest.mark.asyncio
    async def test_concurrent_first_logins_converge(self):
        """Concurrent first logins for a subject should yield one user."""
        service, user_repo = make_service()
        claim = ExternalIdentityClaim(subject_id="uid-gina", email="gina@example.com")

        results = await asyncio.gather(*(service.reconcile(claim) for _ in range(5)))

        assert len({user.id for user in results}) == 1
        assert len(await user_repo.list_users(limit=10)) == 1


class TestNewUserUsername:
    """Usernames derived for users created from a claim."""

    @pytest.mark.asyncio
    async def test_subject_outside_username_alphabet(self):
        """Subject ids with other characters should still create the user."""
        service, _ = make_service()

        user = await service.reconcile(
            ExternalIdentityClaim(subject_id="auth0|abc", email="a@x.com")
        )

        assert user.id is not None
        assert user.firebase_uid == "auth0|abc"
        assert user.username.root == "auth0_abc"
        assert user.display_name == "auth0|abc"

    @pytest.mark.asyncio
    async def test_short_subject_is_padded(self):
        service, _ = make_service()

        user = await service.reconcile(ExternalIdentityClaim(subject_id="ab"))

        assert user.firebase_uid == "ab"
        assert user.username.root == "ab_"

    @pytest.mark.asyncio
    async def test_long_subject_is_kept_at_limit(self):
        service, _ = make_service()

        user = await service.reconcile(ExternalIdentityClaim(subject_id="x" * 128))

        assert user.firebase_uid == "x" * 128
        assert user.username.root == "x" * 128

    @pytest.mark.asyncio
    async def test_username_held_by_local_account(self):
        """A local account owning the handle should not block the login."""
        # Arrange
        service, user_repo = make_service()
        local = await user_repo.create(
            User(
                username=Username("abc123uid"),
                display_name="Local",
                email="local@x.com",
                password_hash="$2b$04$hash",
            )
        )

        # Act
        user = await service.reconcile(
            ExternalIdentityClaim(subject_id="abc123uid", email="new@x.com")
        )

        # Assert
        assert user.id != local.id
        assert user.firebase_uid == "abc123uid"
        assert user.username.root.startswith("abc123uid-")
        assert await user_repo.find_by_id(local.id) == local

        again = await service.reconcile(
            ExternalIdentityClaim(subject_id="abc123uid", email="new@x.com")
        )
        assert again.id == user.id
        assert len(await user_repo.list_users(limit=10)) == 2


class RacingUserRepository(InMemoryUserRepository):
    """Simulates another login creating the user between lookup and insert."""

    def __init__(self, racer: User) -> None:
        super().__init__()
        self.racer = racer
        self.raced = False

    async def create(self, user: User) -> User:
        if not self.raced:
            self.raced = True
            await super().create(self.racer)
        return await super().create(user)


class AlwaysConflictingUserRepository(InMemoryUserRepository):
    """Every insert collides and no lookup ever finds the winner."""

    async def create(self, user: User) -> User:
        raise IntegrityError("duplicate key", None, Exception())


class TestReconcileRaces:
    """Lost races against concurrent writers."""

    @pytest.mark.asyncio
    async def test_lost_insert_race_resolves_winner(self):
        """A uniqueness violation should be resolved by repeating the lookup."""
        winner = User(
            username=Username("uid-hank"),
            display_name="Hank",
            email="hank@example.com",
            firebase_uid="uid-hank",
        )
        user_repo = RacingUserRepository(racer=winner)
        service = IdentityReconciliationService(user_repo)

        user = await service.reconcile(
            ExternalIdentityClaim(subject_id="uid-hank", email="hank@example.com")
        )

        assert user.firebase_uid == "uid-hank"
        assert len(await user_repo.list_users(limit=10)) == 1

    @pytest.mark.asyncio
    async def test_unresolvable_conflict_raises_storage_error(self):
        """Retries are bounded and end in StorageError."""
        service = IdentityReconciliationService(AlwaysConflictingUserRepository())

        with pytest.raises(StorageError):
            await service.reconcile(ExternalIdentityClaim(subject_id="uid-ivy"))

    @pytest.mark.asyncio
    async def test_username_taken_during_insert_gets_suffix(self):
        """A handle claimed between lookup and insert is replaced on retry."""
        squatter = User(
            username=Username("uid-jill"),
            display_name="Jill Local",
            email="jill.local@example.com",
            password_hash="$2b$04$hash",
        )
        user_repo = RacingUserRepository(racer=squatter)
        service = IdentityReconciliationService(user_repo)

        user = await service.reconcile(
            ExternalIdentityClaim(subject_id="uid-jill", email="jill@example.com")
        )

        assert user.firebase_uid == "uid-jill"
        assert user.username.root.startswith("uid-jill-")
        assert len(await user_repo.list_users(limit=10)) == 2


class TestExternalIdentityVerifier:
    """The verifier contract."""

    def test_interface_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            ExternalIdentityVerifier()

    def test_implementation_must_define_verify(self):
        class Incomplete(ExternalIdentityVerifier):
            pass

        with pytest.raises(TypeError):
            Incomplete()


class TestUsernameFromSubjectId:
    """Username.from_subject_id()."""

    def test_valid_subject_is_kept(self):
        assert Username.from_subject_id("uid-alice").root == "uid-alice"

    def test_disallowed_characters_are_replaced(self):
        username = Username.from_subject_id("google-oauth2|10 4")

        assert username.root == "google-oauth2_10_4"

    def test_suffix_fits_within_limit(self):
        username = Username.from_subject_id("y" * 128, suffix="a1b2c3")

        assert len(username.root) == 128
        assert username.root.endswith("-a1b2c3")

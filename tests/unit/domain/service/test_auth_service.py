"""Unit tests for AuthService and SessionTokenService."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from social.config import AuthSettings
from social.domain.error import AuthenticationError, ConflictError
from social.domain.model import User
from social.domain.service import AuthService, SessionTokenService
from social.domain.value import UserId
from social.domain.value.types import Username
from social.persistence.repository.inmemory import InMemoryUserRepository
from social.util.jwt import InvalidSignatureError, TokenExpiredError, create_token


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def auth_service(user_repo, auth_settings) -> AuthService:
    return AuthService(user_repo, auth_settings)


class TestSignUp:
    """Tests for AuthService.sign_up()."""

    @pytest.mark.asyncio
    async def test_sign_up_stores_hashed_password(self, auth_service, user_repo):
        """Should create the user with a bcrypt hash, never the password."""
        # Act
        user = await auth_service.sign_up(
            name="Alice", username="alice", email="alice@example.com", password="s3cret-pw"
        )

        # Assert
        assert user.id is not None
        assert user.password_hash is not None
        assert user.password_hash.startswith("$2")
        assert "s3cret-pw" not in user.password_hash
        assert await user_repo.find_by_email("alice@example.com") is not None

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, auth_service):
        """A second signup with the same email should raise ConflictError."""
        await auth_service.sign_up("Alice", "alice", "alice@example.com", "s3cret-pw")

        with pytest.raises(ConflictError, match="email"):
            await auth_service.sign_up("Other", "other", "alice@example.com", "s3cret-pw")

    @pytest.mark.asyncio
    async def test_duplicate_username_conflicts(self, auth_service):
        """A second signup with the same username should raise ConflictError."""
        await auth_service.sign_up("Alice", "alice", "alice@example.com", "s3cret-pw")

        with pytest.raises(ConflictError, match="Username"):
            await auth_service.sign_up("Alice", "alice", "other@example.com", "s3cret-pw")


class TestSignIn:
    """Tests for AuthService.sign_in()."""

    @pytest.mark.asyncio
    async def test_sign_in_with_correct_password(self, auth_service):
        """Should return the user for matching credentials."""
        created = await auth_service.sign_up(
            "Alice", "alice", "alice@example.com", "s3cret-pw"
        )

        user = await auth_service.sign_in("alice@example.com", "s3cret-pw")

        assert user.id == created.id

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, auth_service):
        """Both failures should carry the same message."""
        await auth_service.sign_up("Alice", "alice", "alice@example.com", "s3cret-pw")

        with pytest.raises(AuthenticationError) as wrong_password:
            await auth_service.sign_in("alice@example.com", "wrong-pw")
        with pytest.raises(AuthenticationError) as unknown_email:
            await auth_service.sign_in("nobody@example.com", "s3cret-pw")

        assert wrong_password.value.message == unknown_email.value.message

    @pytest.mark.asyncio
    async def test_passwordless_account_cannot_sign_in(self, auth_service, user_repo):
        """Accounts created through the identity provider have no password."""
        await user_repo.create(
            User(
                username=Username("uid-alice"),
                display_name="Alice",
                email="alice@example.com",
                firebase_uid="uid-alice",
            )
        )

        with pytest.raises(AuthenticationError):
            await auth_service.sign_in("alice@example.com", "")


class TestRegisterExternal:
    """Tests for the deprecated AuthService.register_external()."""

    @pytest.mark.asyncio
    async def test_registers_user_with_subject_id(self, auth_service):
        """Should create a passwordless user linked to the subject id."""
        user = await auth_service.register_external(
            name="Bob", email="bob@example.com", subject_id="uid-bob", age=30
        )

        assert user.firebase_uid == "uid-bob"
        assert user.age == 30
        assert user.password_hash is None

    @pytest.mark.asyncio
    async def test_duplicate_subject_conflicts(self, auth_service):
        """A second registration for the same subject id should conflict."""
        await auth_service.register_external("Bob", "bob@example.com", "uid-bob")

        with pytest.raises(ConflictError):
            await auth_service.register_external("Bob", "bob2@example.com", "uid-bob")

    @pytest.mark.asyncio
    async def test_subject_outside_username_alphabet(self, auth_service):
        """Any subject id should register, under a derived username."""
        user = await auth_service.register_external(
            "Bob", "bob@example.com", "auth0|bob"
        )

        assert user.firebase_uid == "auth0|bob"
        assert user.username.root == "auth0_bob"

    @pytest.mark.asyncio
    async def test_username_held_by_local_account(self, auth_service, user_repo):
        """A local account owning the handle should not block registration."""
        await user_repo.create(
            User(
                username=Username("uid-bob"),
                display_name="Local Bob",
                email="local.bob@example.com",
                password_hash="$2b$04$hash",
            )
        )

        user = await auth_service.register_external("Bob", "bob@example.com", "uid-bob")

        assert user.firebase_uid == "uid-bob"
        assert user.username.root.startswith("uid-bob-")

    @pytest.mark.asyncio
    async def test_lost_insert_race_names_all_unique_fields(self, auth_settings):
        """An insert collision should not blame the subject id alone."""
        auth_service = AuthService(ConflictingUserRepository(), auth_settings)

        with pytest.raises(ConflictError) as exc_info:
            await auth_service.register_external("Bob", "bob@example.com", "uid-bob")

        assert exc_info.value.message == (
            "User with this Firebase UID, email or username already registered"
        )


class ConflictingUserRepository(InMemoryUserRepository):
    """Lookups find nothing but every insert collides."""

    async def create(self, user: User) -> User:
        raise IntegrityError("duplicate key", None, Exception())


class TestSessionTokenService:
    """Tests for SessionTokenService."""

    def _user(self) -> User:
        return User(
            id=UserId(5),
            username=Username("alice"),
            display_name="Alice",
            email="alice@example.com",
            password_hash="$2b$04$hash",
        )

    def test_issue_then_verify(self, auth_settings):
        """An issued token should verify to the user's identity."""
        service = SessionTokenService(auth_settings)

        identity = service.verify(service.issue(self._user()))

        assert identity.user_id == 5
        assert identity.email == "alice@example.com"

    def test_issue_requires_persisted_user(self, auth_settings):
        """Unsaved users have no id to put in a token."""
        service = SessionTokenService(auth_settings)

        with pytest.raises(ValueError):
            service.issue(self._user().model_copy(update={"id": None}))

    def test_user_without_email_gets_empty_email_claim(self, auth_settings):
        """The email claim is always present."""
        service = SessionTokenService(auth_settings)
        user = self._user().model_copy(update={"email": None})

        assert service.verify(service.issue(user)).email == ""

    def test_verify_propagates_expiry(self, auth_settings):
        """Expired tokens should raise TokenExpiredError."""
        service = SessionTokenService(auth_settings)
        token = create_token(
            5,
            "alice@example.com",
            auth_settings,
            now=datetime.now(timezone.utc) - timedelta(hours=80),
        )

        with pytest.raises(TokenExpiredError):
            service.verify(token)

    def test_verify_rejects_foreign_secret(self, auth_settings):
        """Tokens from another secret should raise InvalidSignatureError."""
        service = SessionTokenService(auth_settings)
        token = create_token(5, "alice@example.com", AuthSettings(jwt_secret="other"))

        with pytest.raises(InvalidSignatureError):
            service.verify(token)

    def test_identity_from_token_is_lenient(self, auth_settings):
        """Optional auth should treat bad or missing tokens as anonymous."""
        service = SessionTokenService(auth_settings)

        assert service.identity_from_token(None) is None
        assert service.identity_from_token("garbage") is None
        assert service.identity_from_token(service.issue(self._user())).user_id == 5

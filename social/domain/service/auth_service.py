"""Local credential authentication domain service."""

import logfire
from sqlalchemy.exc import IntegrityError

from social.config import AuthSettings
from social.domain.error import AuthenticationError, ConflictError
from social.domain.model import User
from social.domain.repository import UserRepository
from social.domain.value.types import Username
from social.util.password import hash_password, verify_password

from .base import Service
from .identity_service import available_username

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService(Service):
    """Domain service for password-based and legacy registration flows."""

    def __init__(
        self, user_repository: UserRepository, auth_settings: AuthSettings
    ) -> None:
        """Initialize auth service.

        Args:
            user_repository: User repository (credential store)
            auth_settings: Authentication settings (bcrypt work factor)
        """
        self.user_repository = user_repository
        self.auth_settings = auth_settings

    async def sign_up(
        self, name: str, username: str, email: str, password: str
    ) -> User:
        """Register a local account with a password.

        Args:
            name: Display name
            username: Unique username
            email: Unique email
            password: Plain-text password

        Returns:
            Created user

        Raises:
            ConflictError: If email or username is already registered
        """
        with logfire.span("auth_service.sign_up", email=email, username=username):
            if await self.user_repository.find_by_email(email):
                logfire.warn("Signup with registered email", email=email)
                raise ConflictError("User with this email already registered")
            if await self.user_repository.find_by_username(username):
                logfire.warn("Signup with taken username", username=username)
                raise ConflictError("Username already taken")

            password_hash = await hash_password(
                password, rounds=self.auth_settings.bcrypt_rounds
            )
            user = User(
                username=Username(username),
                display_name=name,
                email=email,
                password_hash=password_hash,
            )

            try:
                created = await self.user_repository.create(user)
            except IntegrityError:
                # Lost the race against a concurrent signup
                logfire.warn("Signup uniqueness violation", email=email)
                raise ConflictError("User with this email or username already registered")

            logfire.info("User signed up", user_id=created.id)
            return created

    async def sign_in(self, email: str, password: str) -> User:
        """Authenticate with email and password.

        Unknown email, wrong password and passwordless accounts fail with
        the same message.

        Args:
            email: Account email
            password: Plain-text password

        Returns:
            Authenticated user

        Raises:
            AuthenticationError: If the credentials do not match
        """
        with logfire.span("auth_service.sign_in", email=email):
            user = await self.user_repository.find_by_email(email)
            if user is None or not user.password_hash:
                logfire.info("Sign-in rejected", reason="no_password_account")
                raise AuthenticationError(INVALID_CREDENTIALS)

            if not await verify_password(password, user.password_hash):
                logfire.info("Sign-in rejected", reason="password_mismatch", user_id=user.id)
                raise AuthenticationError(INVALID_CREDENTIALS)

            logfire.info("User signed in", user_id=user.id)
            return user

    async def register_external(
        self,
        name: str,
        email: str,
        subject_id: str,
        age: int | None = None,
    ) -> User:
        """Create a user from a client-supplied external subject id.

        Deprecated: the subject id is trusted as sent and is not verified
        with the identity provider. Use the ID token login flow instead.

        Args:
            name: Display name
            email: Unique email
            subject_id: External subject id, unverified
            age: Optional age

        Returns:
            Created user

        Raises:
            ConflictError: If the subject id or email is already registered
        """
        with logfire.span("auth_service.register_external", subject_id=subject_id):
            logfire.warn("Deprecated unverified registration used", subject_id=subject_id)

            if await self.user_repository.find_by_external_subject_id(subject_id):
                raise ConflictError("User with this Firebase UID already registered")
            if await self.user_repository.find_by_email(email):
                raise ConflictError("User with this email already registered")

            user = User(
                username=await available_username(self.user_repository, subject_id),
                display_name=name,
                email=email,
                firebase_uid=subject_id,
                age=age,
            )
            try:
                created = await self.user_repository.create(user)
            except IntegrityError:
                # Lost a race on one of the unique columns
                raise ConflictError(
                    "User with this Firebase UID, email or username already registered"
                )

            logfire.info("User registered", user_id=created.id)
            return created

"""Domain layer DI providers."""

from dishka import Scope, provide

from social.config import AuthSettings
from social.domain.repository import (
    CommentLikeRepository,
    CommentRepository,
    FollowRepository,
    FriendRequestRepository,
    LikeRepository,
    NotificationRepository,
    PostRepository,
    SavedPostRepository,
    StoryActivityRepository,
    StoryRepository,
    UserRepository,
)
from social.domain.service import (
    AuthService,
    CommentService,
    FollowService,
    FriendService,
    IdentityReconciliationService,
    LikeService,
    NotificationService,
    PostService,
    SavedPostService,
    SessionTokenService,
    StoryService,
    UserService,
)
from social.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_session_token_service(
        self, auth_settings: AuthSettings
    ) -> SessionTokenService:
        """Provide session token domain service (stateless, shared)."""
        return SessionTokenService(auth_settings=auth_settings)

    @provide
    def get_auth_service(
        self, user_repository: UserRepository, auth_settings: AuthSettings
    ) -> AuthService:
        """Provide credential flows domain service."""
        return AuthService(user_repository=user_repository, auth_settings=auth_settings)

    @provide
    def get_identity_reconciliation_service(
        self, user_repository: UserRepository
    ) -> IdentityReconciliationService:
        """Provide identity reconciliation domain service."""
        return IdentityReconciliationService(user_repository=user_repository)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_notification_service(
        self, notification_repository: NotificationRepository
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(notification_repository=notification_repository)

    @provide
    def get_post_service(
        self, post_repository: PostRepository, user_service: UserService
    ) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository, user_service=user_service)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        comment_like_repository: CommentLikeRepository,
        post_service: PostService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            comment_like_repository=comment_like_repository,
            post_service=post_service,
            user_service=user_service,
            notification_service=notification_service,
        )

    @provide
    def get_like_service(
        self,
        like_repository: LikeRepository,
        post_service: PostService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> LikeService:
        """Provide post like domain service."""
        return LikeService(
            like_repository=like_repository,
            post_service=post_service,
            user_service=user_service,
            notification_service=notification_service,
        )

    @provide
    def get_follow_service(
        self,
        follow_repository: FollowRepository,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> FollowService:
        """Provide follow domain service."""
        return FollowService(
            follow_repository=follow_repository,
            user_service=user_service,
            notification_service=notification_service,
        )

    @provide
    def get_friend_service(
        self,
        friend_request_repository: FriendRequestRepository,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> FriendService:
        """Provide friend domain service."""
        return FriendService(
            friend_request_repository=friend_request_repository,
            user_service=user_service,
            notification_service=notification_service,
        )

    @provide
    def get_saved_post_service(
        self, saved_post_repository: SavedPostRepository, post_service: PostService
    ) -> SavedPostService:
        """Provide saved post domain service."""
        return SavedPostService(
            saved_post_repository=saved_post_repository, post_service=post_service
        )

    @provide
    def get_story_service(
        self,
        story_repository: StoryRepository,
        story_activity_repository: StoryActivityRepository,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> StoryService:
        """Provide story domain service."""
        return StoryService(
            story_repository=story_repository,
            story_activity_repository=story_activity_repository,
            user_service=user_service,
            notification_service=notification_service,
        )

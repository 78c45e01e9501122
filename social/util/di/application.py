"""Application layer DI providers."""

from dishka import Scope, provide

from social.application.usecase.auth import (
    FirebaseLoginUseCase,
    GetCurrentUserUseCase,
    RegisterUseCase,
    SignInUseCase,
    SignUpUseCase,
)
from social.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    LikeCommentUseCase,
    UnlikeCommentUseCase,
    UpdateCommentUseCase,
)
from social.application.usecase.feed import GetFeedUseCase
from social.application.usecase.follow import (
    FollowUserUseCase,
    ListFollowersUseCase,
    ListFollowingUseCase,
    UnfollowUserUseCase,
)
from social.application.usecase.friend import (
    ListFriendsUseCase,
    PendingRequestsUseCase,
    RemoveFriendUseCase,
    RespondFriendRequestUseCase,
    SendFriendRequestUseCase,
)
from social.application.usecase.like import (
    LikeCountUseCase,
    LikePostUseCase,
    LikeStatusUseCase,
    UnlikePostUseCase,
)
from social.application.usecase.notification import (
    GroupedNotificationsUseCase,
    ListNotificationsUseCase,
    MarkAllReadUseCase,
    MarkReadUseCase,
    UnreadCountUseCase,
)
from social.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    UpdatePostUseCase,
)
from social.application.usecase.saved_post import (
    ListSavedPostsUseCase,
    SavePostUseCase,
    UnsavePostUseCase,
)
from social.application.usecase.story import (
    CreateStoryUseCase,
    GetStoryUseCase,
    ListStoriesUseCase,
    MarkStorySeenUseCase,
    ReactToStoryUseCase,
)
from social.application.usecase.user import (
    DeleteProfileUseCase,
    GetUserUseCase,
    SearchUsersUseCase,
    SuggestedUsersUseCase,
    UpdateProfileUseCase,
)
from social.domain.repository import LikeRepository, SavedPostRepository
from social.domain.service import (
    AuthService,
    CommentService,
    ExternalIdentityVerifier,
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


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_sign_up_use_case(
        self, auth_service: AuthService, session_token_service: SessionTokenService
    ) -> SignUpUseCase:
        """Provide sign up use case."""
        return SignUpUseCase(
            auth_service=auth_service, session_token_service=session_token_service
        )

    @provide
    def get_sign_in_use_case(
        self, auth_service: AuthService, session_token_service: SessionTokenService
    ) -> SignInUseCase:
        """Provide sign in use case."""
        return SignInUseCase(
            auth_service=auth_service, session_token_service=session_token_service
        )

    @provide
    def get_firebase_login_use_case(
        self,
        identity_verifier: ExternalIdentityVerifier,
        reconciliation_service: IdentityReconciliationService,
        session_token_service: SessionTokenService,
    ) -> FirebaseLoginUseCase:
        """Provide Firebase login use case."""
        return FirebaseLoginUseCase(
            identity_verifier=identity_verifier,
            reconciliation_service=reconciliation_service,
            session_token_service=session_token_service,
        )

    @provide
    def get_register_use_case(self, auth_service: AuthService) -> RegisterUseCase:
        """Provide legacy register use case."""
        return RegisterUseCase(auth_service=auth_service)

    @provide
    def get_current_user_use_case(
        self, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(user_service=user_service)

    # User use cases
    get_user_use_case = provide(GetUserUseCase)
    get_update_profile_use_case = provide(UpdateProfileUseCase)
    get_delete_profile_use_case = provide(DeleteProfileUseCase)
    get_suggested_users_use_case = provide(SuggestedUsersUseCase)
    get_search_users_use_case = provide(SearchUsersUseCase)

    # Post use cases
    get_create_post_use_case = provide(CreatePostUseCase)
    get_get_post_use_case = provide(GetPostUseCase)
    get_list_posts_use_case = provide(ListPostsUseCase)
    get_update_post_use_case = provide(UpdatePostUseCase)
    get_delete_post_use_case = provide(DeletePostUseCase)

    @provide
    def get_feed_use_case(
        self,
        post_service: PostService,
        user_service: UserService,
        like_repository: LikeRepository,
        saved_post_repository: SavedPostRepository,
    ) -> GetFeedUseCase:
        """Provide feed use case."""
        return GetFeedUseCase(
            post_service=post_service,
            user_service=user_service,
            like_repository=like_repository,
            saved_post_repository=saved_post_repository,
        )

    # Comment use cases
    @provide
    def get_create_comment_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, user_service=user_service
        )

    @provide
    def get_get_comments_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service, user_service=user_service
        )

    get_update_comment_use_case = provide(UpdateCommentUseCase)
    get_delete_comment_use_case = provide(DeleteCommentUseCase)
    get_like_comment_use_case = provide(LikeCommentUseCase)
    get_unlike_comment_use_case = provide(UnlikeCommentUseCase)

    # Like use cases
    @provide
    def get_like_post_use_case(self, like_service: LikeService) -> LikePostUseCase:
        """Provide like post use case."""
        return LikePostUseCase(like_service=like_service)

    get_unlike_post_use_case = provide(UnlikePostUseCase)
    get_like_count_use_case = provide(LikeCountUseCase)
    get_like_status_use_case = provide(LikeStatusUseCase)

    # Follow use cases
    @provide
    def get_follow_user_use_case(
        self, follow_service: FollowService
    ) -> FollowUserUseCase:
        """Provide follow user use case."""
        return FollowUserUseCase(follow_service=follow_service)

    get_unfollow_user_use_case = provide(UnfollowUserUseCase)
    get_list_followers_use_case = provide(ListFollowersUseCase)
    get_list_following_use_case = provide(ListFollowingUseCase)

    # Friend use cases
    @provide
    def get_send_friend_request_use_case(
        self, friend_service: FriendService
    ) -> SendFriendRequestUseCase:
        """Provide send friend request use case."""
        return SendFriendRequestUseCase(friend_service=friend_service)

    get_pending_requests_use_case = provide(PendingRequestsUseCase)
    get_respond_friend_request_use_case = provide(RespondFriendRequestUseCase)
    get_list_friends_use_case = provide(ListFriendsUseCase)
    get_remove_friend_use_case = provide(RemoveFriendUseCase)

    # Saved post use cases
    @provide
    def get_save_post_use_case(
        self, saved_post_service: SavedPostService
    ) -> SavePostUseCase:
        """Provide save post use case."""
        return SavePostUseCase(saved_post_service=saved_post_service)

    get_unsave_post_use_case = provide(UnsavePostUseCase)
    get_list_saved_posts_use_case = provide(ListSavedPostsUseCase)

    # Story use cases
    @provide
    def get_list_stories_use_case(
        self, story_service: StoryService, user_service: UserService
    ) -> ListStoriesUseCase:
        """Provide list stories use case."""
        return ListStoriesUseCase(story_service=story_service, user_service=user_service)

    get_get_story_use_case = provide(GetStoryUseCase)
    get_create_story_use_case = provide(CreateStoryUseCase)
    get_mark_story_seen_use_case = provide(MarkStorySeenUseCase)
    get_react_to_story_use_case = provide(ReactToStoryUseCase)

    # Notification use cases
    @provide
    def get_list_notifications_use_case(
        self, notification_service: NotificationService, user_service: UserService
    ) -> ListNotificationsUseCase:
        """Provide list notifications use case."""
        return ListNotificationsUseCase(
            notification_service=notification_service, user_service=user_service
        )

    get_grouped_notifications_use_case = provide(GroupedNotificationsUseCase)
    get_unread_count_use_case = provide(UnreadCountUseCase)
    get_mark_read_use_case = provide(MarkReadUseCase)
    get_mark_all_read_use_case = provide(MarkAllReadUseCase)

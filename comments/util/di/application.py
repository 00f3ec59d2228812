"""Application layer DI providers."""

from dishka import Scope, provide

from comments.application.usecase.comment import GetThreadUseCase, SubmitCommentUseCase
from comments.application.usecase.flag import ToggleFlagUseCase
from comments.application.usecase.moderation import (
    BulkSetStatusUseCase,
    DeleteCommentUseCase,
    TrashCommentUseCase,
    UpdateCommentStatusUseCase,
)
from comments.application.usecase.subscription import SetSubscriptionUseCase
from comments.application.usecase.vote import CastVoteUseCase
from comments.domain.service import (
    CommentService,
    FlagService,
    SubscriptionService,
    VoteService,
)
from comments.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_comment_use_case(
        self, comment_service: CommentService
    ) -> SubmitCommentUseCase:
        """Provide submit comment use case."""
        return SubmitCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self,
        comment_service: CommentService,
        flag_service: FlagService,
        vote_service: VoteService,
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(
            comment_service=comment_service,
            flag_service=flag_service,
            vote_service=vote_service,
        )

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_update_comment_status_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentStatusUseCase:
        """Provide update comment status use case."""
        return UpdateCommentStatusUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_bulk_set_status_use_case(
        self, comment_service: CommentService
    ) -> BulkSetStatusUseCase:
        """Provide bulk set status use case."""
        return BulkSetStatusUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_trash_comment_use_case(
        self, comment_service: CommentService
    ) -> TrashCommentUseCase:
        """Provide trash comment use case."""
        return TrashCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    # Flag use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_flag_use_case(
        self, comment_service: CommentService, flag_service: FlagService
    ) -> ToggleFlagUseCase:
        """Provide toggle flag use case."""
        return ToggleFlagUseCase(
            comment_service=comment_service, flag_service=flag_service
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, comment_service: CommentService, vote_service: VoteService
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            comment_service=comment_service, vote_service=vote_service
        )

    # Subscription use cases
    @provide(scope=Scope.REQUEST)
    def get_set_subscription_use_case(
        self, subscription_service: SubscriptionService
    ) -> SetSubscriptionUseCase:
        """Provide set subscription use case."""
        return SetSubscriptionUseCase(subscription_service=subscription_service)

"""Domain layer DI providers."""

from dishka import Scope, provide

from comments.config import (
    AuthSettings,
    CommentSettings,
    NotificationSettings,
    PrivacySettings,
    SecuritySettings,
)
from comments.domain.repository import (
    CommentRepository,
    FlagRepository,
    OwnerRepository,
    StructureRepository,
    SubscriptionRepository,
    TransactionManager,
    UserRepository,
    VoteRepository,
)
from comments.domain.service import (
    CommentPolicy,
    CommentService,
    FlagService,
    JWTService,
    NotificationService,
    NotificationTransport,
    SecurityService,
    SpamChecker,
    SubscriptionService,
    VoteService,
)
from comments.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_comment_policy(self, settings: CommentSettings) -> CommentPolicy:
        """Provide capability policy."""
        return CommentPolicy(settings=settings)

    @provide
    def get_security_service(
        self, settings: SecuritySettings, spam_checker: SpamChecker
    ) -> SecurityService:
        """Provide pre-save security gate."""
        return SecurityService(settings=settings, spam_checker=spam_checker)

    @provide
    def get_flag_service(
        self,
        flag_repository: FlagRepository,
        policy: CommentPolicy,
        comment_settings: CommentSettings,
        privacy_settings: PrivacySettings,
    ) -> FlagService:
        """Provide flag domain service."""
        return FlagService(
            flag_repository=flag_repository,
            policy=policy,
            comment_settings=comment_settings,
            privacy_settings=privacy_settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        policy: CommentPolicy,
        comment_settings: CommentSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            policy=policy,
            comment_settings=comment_settings,
        )

    @provide
    def get_subscription_service(
        self, subscription_repository: SubscriptionRepository
    ) -> SubscriptionService:
        """Provide subscription domain service."""
        return SubscriptionService(subscription_repository=subscription_repository)

    @provide
    def get_notification_service(
        self,
        settings: NotificationSettings,
        transport: NotificationTransport,
        subscription_service: SubscriptionService,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
        transaction_manager: TransactionManager,
    ) -> NotificationService:
        """Provide notification dispatcher."""
        return NotificationService(
            settings=settings,
            transport=transport,
            subscription_service=subscription_service,
            comment_repository=comment_repository,
            user_repository=user_repository,
            transaction_manager=transaction_manager,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        owner_repository: OwnerRepository,
        user_repository: UserRepository,
        structure_repository: StructureRepository,
        policy: CommentPolicy,
        security_service: SecurityService,
        flag_service: FlagService,
        vote_service: VoteService,
        subscription_service: SubscriptionService,
        notification_service: NotificationService,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            owner_repository=owner_repository,
            user_repository=user_repository,
            structure_repository=structure_repository,
            policy=policy,
            security_service=security_service,
            flag_service=flag_service,
            vote_service=vote_service,
            subscription_service=subscription_service,
            notification_service=notification_service,
            settings=settings,
        )

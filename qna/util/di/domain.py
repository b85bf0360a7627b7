"""Domain layer DI providers."""

from dishka import Scope, provide

from qna.config import AuthSettings, PolicySettings, ReputationSettings
from qna.domain.repository import (
    AnswerRepository,
    NotificationRepository,
    QuestionRepository,
    UserRepository,
    VoteRepository,
)
from qna.domain.service import (
    AcceptanceService,
    AnswerService,
    CounterService,
    JWTService,
    NotificationService,
    QuestionService,
    UserService,
    VoteService,
)
from qna.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances sharing one transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_question_service(
        self, question_repository: QuestionRepository
    ) -> QuestionService:
        """Provide question domain service."""
        return QuestionService(question_repository=question_repository)

    @provide
    def get_answer_service(
        self,
        answer_repository: AnswerRepository,
        question_repository: QuestionRepository,
    ) -> AnswerService:
        """Provide answer domain service."""
        return AnswerService(
            answer_repository=answer_repository,
            question_repository=question_repository,
        )

    @provide
    def get_counter_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
    ) -> CounterService:
        """Provide aggregate counter domain service."""
        return CounterService(
            question_repository=question_repository,
            answer_repository=answer_repository,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        counter_service: CounterService,
        user_service: UserService,
        policy: PolicySettings,
        reputation: ReputationSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            question_repository=question_repository,
            answer_repository=answer_repository,
            counter_service=counter_service,
            user_service=user_service,
            policy=policy,
            reputation=reputation,
        )

    @provide
    def get_acceptance_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        user_service: UserService,
        policy: PolicySettings,
        reputation: ReputationSettings,
    ) -> AcceptanceService:
        """Provide acceptance domain service."""
        return AcceptanceService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            user_service=user_service,
            policy=policy,
            reputation=reputation,
        )

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        policy: PolicySettings,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            notification_repository=notification_repository, policy=policy
        )

"""Application layer DI providers."""

from dishka import Scope, provide

from qna.application.usecase.answer import (
    AcceptAnswerUseCase,
    PostAnswerUseCase,
    RecordAIAnswerUseCase,
    UnacceptAnswerUseCase,
)
from qna.application.usecase.notification import (
    ListNotificationsUseCase,
    MarkAllReadUseCase,
    MarkNotificationReadUseCase,
)
from qna.application.usecase.question import (
    AskQuestionUseCase,
    GetQuestionUseCase,
    ListQuestionsUseCase,
)
from qna.application.usecase.user import GetUserProfileUseCase, RegisterUserUseCase
from qna.application.usecase.vote import CastVoteUseCase
from qna.domain.service import (
    AcceptanceService,
    AnswerService,
    NotificationService,
    QuestionService,
    UserService,
    VoteService,
)
from qna.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_register_user_use_case(
        self, user_service: UserService
    ) -> RegisterUserUseCase:
        """Provide register user use case."""
        return RegisterUserUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_get_user_profile_use_case(
        self, user_service: UserService, question_service: QuestionService
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(
            user_service=user_service, question_service=question_service
        )

    # Question use cases
    @provide(scope=Scope.REQUEST)
    def get_ask_question_use_case(
        self, question_service: QuestionService, user_service: UserService
    ) -> AskQuestionUseCase:
        """Provide ask question use case."""
        return AskQuestionUseCase(
            question_service=question_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_questions_use_case(
        self,
        question_service: QuestionService,
        user_service: UserService,
        vote_service: VoteService,
    ) -> ListQuestionsUseCase:
        """Provide list questions use case."""
        return ListQuestionsUseCase(
            question_service=question_service,
            user_service=user_service,
            vote_service=vote_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_question_use_case(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        user_service: UserService,
        vote_service: VoteService,
    ) -> GetQuestionUseCase:
        """Provide get question use case."""
        return GetQuestionUseCase(
            question_service=question_service,
            answer_service=answer_service,
            user_service=user_service,
            vote_service=vote_service,
        )

    # Answer use cases
    @provide(scope=Scope.REQUEST)
    def get_post_answer_use_case(
        self,
        answer_service: AnswerService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> PostAnswerUseCase:
        """Provide post answer use case."""
        return PostAnswerUseCase(
            answer_service=answer_service,
            user_service=user_service,
            notification_service=notification_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_record_ai_answer_use_case(
        self,
        answer_service: AnswerService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> RecordAIAnswerUseCase:
        """Provide record AI answer use case."""
        return RecordAIAnswerUseCase(
            answer_service=answer_service,
            user_service=user_service,
            notification_service=notification_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_accept_answer_use_case(
        self,
        acceptance_service: AcceptanceService,
        question_service: QuestionService,
        notification_service: NotificationService,
    ) -> AcceptAnswerUseCase:
        """Provide accept answer use case."""
        return AcceptAnswerUseCase(
            acceptance_service=acceptance_service,
            question_service=question_service,
            notification_service=notification_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_unaccept_answer_use_case(
        self, acceptance_service: AcceptanceService
    ) -> UnacceptAnswerUseCase:
        """Provide unaccept answer use case."""
        return UnacceptAnswerUseCase(acceptance_service=acceptance_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    # Notification use cases
    @provide(scope=Scope.REQUEST)
    def get_list_notifications_use_case(
        self, notification_service: NotificationService
    ) -> ListNotificationsUseCase:
        """Provide list notifications use case."""
        return ListNotificationsUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_notification_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationReadUseCase:
        """Provide mark notification read use case."""
        return MarkNotificationReadUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_all_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkAllReadUseCase:
        """Provide mark all read use case."""
        return MarkAllReadUseCase(notification_service=notification_service)

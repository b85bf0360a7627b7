"""Unit tests for answer use cases."""

from uuid import uuid4

import pytest

from qna.application.usecase.answer import (
    AcceptAnswerRequest,
    AcceptAnswerUseCase,
    PostAnswerRequest,
    PostAnswerUseCase,
    RecordAIAnswerRequest,
    RecordAIAnswerUseCase,
    UnacceptAnswerRequest,
    UnacceptAnswerUseCase,
)
from qna.domain.error import NotFoundError, ValidationError
from qna.domain.repository import (
    NotificationRepository,
    QuestionRepository,
    UserRepository,
)
from qna.domain.value import AI_ASSISTANT_USER_ID, NotificationType
from tests.factories import make_question, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _asker_and_question(env):
    users = await env.get(UserRepository)
    questions = await env.get(QuestionRepository)
    asker = await make_user(users, "asker")
    question = await make_question(questions, asker)
    return asker, question


class TestPostAnswer:
    """Tests for PostAnswerUseCase."""

    @pytest.mark.asyncio
    async def test_post_answer_notifies_and_refreshes_badge(self, unit_env):
        # Arrange
        use_case = await unit_env.get(PostAnswerUseCase)
        users = await unit_env.get(UserRepository)
        questions = await unit_env.get(QuestionRepository)
        notifications = await unit_env.get(NotificationRepository)
        asker, question = await _asker_and_question(unit_env)
        answerer = await make_user(users, "answerer")

        # Act
        response = await use_case.execute(
            PostAnswerRequest(
                question_id=str(question.id),
                author_id=str(answerer.id),
                content="Catch CancelledError, clean up, then re-raise it.",
            )
        )

        # Assert
        assert response.question_id == str(question.id)
        assert response.is_ai_generated is False
        assert (await questions.find_by_id(question.id)).answer_count == 1
        assert (await users.find_by_id(answerer.id)).answer_count == 1

        inbox = await notifications.find_by_user(asker.id)
        assert len(inbox) == 1
        assert inbox[0].type == NotificationType.ANSWER
        assert inbox[0].message.startswith("answerer answered your question")

    @pytest.mark.asyncio
    async def test_badge_refresh_failure_does_not_fail_the_answer(
        self, unit_env, monkeypatch
    ):
        # Arrange
        use_case = await unit_env.get(PostAnswerUseCase)
        users = await unit_env.get(UserRepository)
        questions = await unit_env.get(QuestionRepository)
        _, question = await _asker_and_question(unit_env)
        answerer = await make_user(users, "answerer")

        async def broken_refresh(user_id):
            raise RuntimeError("stats unavailable")

        monkeypatch.setattr(
            use_case.user_service, "refresh_answer_stats", broken_refresh
        )

        # Act
        response = await use_case.execute(
            PostAnswerRequest(
                question_id=str(question.id),
                author_id=str(answerer.id),
                content="Use asyncio.timeout around the await.",
            )
        )

        # Assert
        assert response.answer_id
        assert (await questions.find_by_id(question.id)).answer_count == 1

    @pytest.mark.asyncio
    async def test_blank_answer_is_rejected(self, unit_env):
        # Arrange
        use_case = await unit_env.get(PostAnswerUseCase)
        users = await unit_env.get(UserRepository)
        _, question = await _asker_and_question(unit_env)
        answerer = await make_user(users, "answerer")

        # Act & Assert
        with pytest.raises(ValidationError, match="must not be empty"):
            await use_case.execute(
                PostAnswerRequest(
                    question_id=str(question.id),
                    author_id=str(answerer.id),
                    content="   ",
                )
            )

    @pytest.mark.asyncio
    async def test_answerer_without_profile(self, unit_env):
        use_case = await unit_env.get(PostAnswerUseCase)
        _, question = await _asker_and_question(unit_env)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                PostAnswerRequest(
                    question_id=str(question.id),
                    author_id=str(uuid4()),
                    content="Some answer",
                )
            )


class TestRecordAIAnswer:
    """Tests for RecordAIAnswerUseCase."""

    @pytest.mark.asyncio
    async def test_ai_answer_is_attributed_to_assistant(self, unit_env):
        # Arrange
        use_case = await unit_env.get(RecordAIAnswerUseCase)
        users = await unit_env.get(UserRepository)
        notifications = await unit_env.get(NotificationRepository)
        asker, question = await _asker_and_question(unit_env)

        # Act
        response = await use_case.execute(
            RecordAIAnswerRequest(
                question_id=str(question.id),
                requested_by=str(asker.id),
                content="<p>You can use <code>asyncio.shield</code> here.</p>",
            )
        )

        # Assert
        assert response.author_id == str(AI_ASSISTANT_USER_ID)
        assert response.is_ai_generated is True
        assert (await users.find_by_id(AI_ASSISTANT_USER_ID)).answer_count == 0

        inbox = await notifications.find_by_user(asker.id)
        assert inbox[0].message.startswith("AI Assistant answered your question")


class TestAcceptAnswer:
    """Tests for AcceptAnswerUseCase and UnacceptAnswerUseCase."""

    @pytest.mark.asyncio
    async def test_accept_notifies_answer_author_once(self, unit_env):
        # Arrange
        post = await unit_env.get(PostAnswerUseCase)
        accept = await unit_env.get(AcceptAnswerUseCase)
        users = await unit_env.get(UserRepository)
        notifications = await unit_env.get(NotificationRepository)
        asker, question = await _asker_and_question(unit_env)
        answerer = await make_user(users, "answerer")
        answer = await post.execute(
            PostAnswerRequest(
                question_id=str(question.id),
                author_id=str(answerer.id),
                content="Use task.cancel() and await the task.",
            )
        )
        request = AcceptAnswerRequest(
            question_id=str(question.id),
            answer_id=answer.answer_id,
            user_id=str(asker.id),
        )

        # Act
        first = await accept.execute(request)
        second = await accept.execute(request)

        # Assert
        assert first.changed is True
        assert second.changed is False
        assert first.accepted_answer_id == answer.answer_id
        inbox = await notifications.find_by_user(answerer.id)
        assert [n.type for n in inbox] == [NotificationType.ACCEPTED]
        assert (await users.find_by_id(answerer.id)).reputation == 15

    @pytest.mark.asyncio
    async def test_unaccept(self, unit_env):
        # Arrange
        post = await unit_env.get(PostAnswerUseCase)
        accept = await unit_env.get(AcceptAnswerUseCase)
        unaccept = await unit_env.get(UnacceptAnswerUseCase)
        users = await unit_env.get(UserRepository)
        asker, question = await _asker_and_question(unit_env)
        answerer = await make_user(users, "answerer")
        answer = await post.execute(
            PostAnswerRequest(
                question_id=str(question.id),
                author_id=str(answerer.id),
                content="Use task.cancel() and await the task.",
            )
        )
        await accept.execute(
            AcceptAnswerRequest(
                question_id=str(question.id),
                answer_id=answer.answer_id,
                user_id=str(asker.id),
            )
        )

        # Act
        response = await unaccept.execute(
            UnacceptAnswerRequest(question_id=str(question.id), user_id=str(asker.id))
        )

        # Assert
        assert response.accepted_answer_id is None
        assert response.previous_answer_id == answer.answer_id
        assert (await users.find_by_id(answerer.id)).reputation == 0

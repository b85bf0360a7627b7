"""Unit tests for NotificationService."""

from uuid import uuid4

import pytest

from qna.config import PolicySettings, Settings
from qna.domain.error import NotFoundError, PermissionDeniedError
from qna.domain.model import Answer, Question
from qna.domain.repository import NotificationRepository
from qna.domain.service import NotificationService
from qna.domain.value import (
    AI_ASSISTANT_USER_ID,
    AnswerId,
    NotificationId,
    NotificationType,
    QuestionId,
    TagName,
    UserId,
)
from tests.harness import create_env_fixture

unit_env = create_env_fixture()
quiet_accept_env = create_env_fixture(
    settings=Settings(policy=PolicySettings(notify_on_accept=False))
)


def _question(author_id=None, title="How do I profile an async Python service?"):
    return Question(
        id=QuestionId(uuid4()),
        title=title,
        description="The service is slow under load and I cannot see why.",
        tags=[TagName("python")],
        author_id=UserId(author_id or uuid4()),
    )


def _answer(question: Question, author_id=None):
    return Answer(
        id=AnswerId(uuid4()),
        question_id=question.id,
        author_id=UserId(author_id or uuid4()),
        content="Use py-spy against the running process.",
    )


class TestNotifyAnswerPosted:
    """Tests for notify_answer_posted."""

    @pytest.mark.asyncio
    async def test_asker_is_notified(self, unit_env):
        # Arrange
        service = await unit_env.get(NotificationService)
        question = _question()
        answer = _answer(question)

        # Act
        notification = await service.notify_answer_posted(question, answer, "bob")

        # Assert
        assert notification.user_id == question.author_id
        assert notification.type == NotificationType.ANSWER
        assert notification.title == "New Answer"
        assert notification.message == (
            'bob answered your question "How do I profile an async Python service?"'
        )
        assert notification.question_id == question.id
        assert notification.answer_id == answer.id
        assert notification.is_read is False

    @pytest.mark.asyncio
    async def test_long_titles_are_shortened(self, unit_env):
        service = await unit_env.get(NotificationService)
        question = _question(title="Why " + "really " * 40 + "slow?")

        notification = await service.notify_answer_posted(
            question, _answer(question), "bob"
        )

        quoted = notification.message.split('"')[1]
        assert len(quoted) <= 80
        assert quoted.endswith("...")

    @pytest.mark.asyncio
    async def test_answering_own_question_sends_nothing(self, unit_env):
        # Arrange
        service = await unit_env.get(NotificationService)
        repo = await unit_env.get(NotificationRepository)
        question = _question()
        answer = _answer(question, author_id=question.author_id)

        # Act
        notification = await service.notify_answer_posted(question, answer, "me")

        # Assert
        assert notification is None
        assert await repo.find_by_user(question.author_id) == []

    @pytest.mark.asyncio
    async def test_storage_failure_is_swallowed(self, unit_env, monkeypatch):
        """Notifications are fire-and-forget."""
        # Arrange
        service = await unit_env.get(NotificationService)
        question = _question()

        async def broken_save(notification):
            raise RuntimeError("disk full")

        monkeypatch.setattr(service.notification_repository, "save", broken_save)

        # Act
        notification = await service.notify_answer_posted(
            question, _answer(question), "bob"
        )

        # Assert
        assert notification is None


class TestNotifyAnswerAccepted:
    """Tests for notify_answer_accepted."""

    @pytest.mark.asyncio
    async def test_answer_author_is_notified(self, unit_env):
        service = await unit_env.get(NotificationService)
        question = _question()
        answer = _answer(question)

        notification = await service.notify_answer_accepted(question, answer)

        assert notification.user_id == answer.author_id
        assert notification.type == NotificationType.ACCEPTED
        assert notification.title == "Answer Accepted"

    @pytest.mark.asyncio
    async def test_ai_assistant_is_never_notified(self, unit_env):
        service = await unit_env.get(NotificationService)
        question = _question()

        notification = await service.notify_answer_accepted(
            question, _answer(question, author_id=AI_ASSISTANT_USER_ID)
        )

        assert notification is None

    @pytest.mark.asyncio
    async def test_disabled_by_policy(self, quiet_accept_env):
        service = await quiet_accept_env.get(NotificationService)
        question = _question()

        notification = await service.notify_answer_accepted(question, _answer(question))

        assert notification is None


class TestReadState:
    """Tests for listing and marking notifications read."""

    @pytest.mark.asyncio
    async def test_mark_read_by_recipient(self, unit_env):
        # Arrange
        service = await unit_env.get(NotificationService)
        question = _question()
        sent = await service.notify_answer_posted(question, _answer(question), "bob")

        # Act
        read = await service.mark_read(sent.id, question.author_id)

        # Assert
        assert read.is_read is True
        assert await service.unread_count(question.author_id) == 0

    @pytest.mark.asyncio
    async def test_mark_read_by_someone_else_is_denied(self, unit_env):
        # Arrange
        service = await unit_env.get(NotificationService)
        question = _question()
        sent = await service.notify_answer_posted(question, _answer(question), "bob")

        # Act & Assert
        with pytest.raises(PermissionDeniedError):
            await service.mark_read(sent.id, UserId(uuid4()))
        assert await service.unread_count(question.author_id) == 1

    @pytest.mark.asyncio
    async def test_mark_read_unknown_notification(self, unit_env):
        service = await unit_env.get(NotificationService)

        with pytest.raises(NotFoundError):
            await service.mark_read(NotificationId(uuid4()), UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_mark_all_read_counts_changed(self, unit_env):
        # Arrange
        service = await unit_env.get(NotificationService)
        question = _question()
        for name in ("bob", "carol", "dave"):
            await service.notify_answer_posted(question, _answer(question), name)
        first = (await service.list_notifications(question.author_id))[0]
        await service.mark_read(first.id, question.author_id)

        # Act
        changed = await service.mark_all_read(question.author_id)

        # Assert
        assert changed == 2
        assert await service.unread_count(question.author_id) == 0
        assert await service.list_notifications(question.author_id, unread_only=True) == []

"""PostgreSQL repository implementations."""

from qna.persistence.repository.answer import PostgresAnswerRepository
from qna.persistence.repository.base import PostgresRepository
from qna.persistence.repository.notification import PostgresNotificationRepository
from qna.persistence.repository.question import PostgresQuestionRepository
from qna.persistence.repository.user import PostgresUserRepository
from qna.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresRepository",
    "PostgresUserRepository",
    "PostgresQuestionRepository",
    "PostgresAnswerRepository",
    "PostgresVoteRepository",
    "PostgresNotificationRepository",
]

"""Shared state behind the in-memory repositories."""

from qna.domain.model import Answer, Notification, Question, User, Vote
from qna.domain.value import (
    AI_ASSISTANT_USER_ID,
    AI_ASSISTANT_USERNAME,
    AnswerId,
    NotificationId,
    QuestionId,
    UserId,
    Username,
    VoteId,
)


class InMemoryStore:
    """Tables as dicts keyed by ID.

    One store outlives many requests, like the database does. Repository
    methods never await while touching it, so each call is atomic on the
    event loop.
    """

    def __init__(self) -> None:
        self.users: dict[UserId, User] = {}
        self.questions: dict[QuestionId, Question] = {}
        self.answers: dict[AnswerId, Answer] = {}
        self.votes: dict[VoteId, Vote] = {}
        self.notifications: dict[NotificationId, Notification] = {}

        # Seeded by migrations in PostgreSQL
        self.users[AI_ASSISTANT_USER_ID] = User(
            id=AI_ASSISTANT_USER_ID,
            username=Username(AI_ASSISTANT_USERNAME),
            email="ai-assistant@localhost",
        )

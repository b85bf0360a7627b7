"""Builders for test data."""

from datetime import timedelta
from uuid import UUID, uuid4

from qna.config import AuthSettings
from qna.domain.model import Answer, Question, User
from qna.domain.repository import AnswerRepository, QuestionRepository, UserRepository
from qna.domain.value import AnswerId, QuestionId, TagName, UserId, Username
from qna.util.jwt import create_token

TEST_JWT_SECRET = "test-secret-that-is-long-enough-for-hs256"


async def make_user(
    user_repository: UserRepository,
    username: str,
    user_id: UUID | None = None,
    reputation: int = 0,
) -> User:
    """Store a user profile and return it."""
    user = User(
        id=UserId(user_id or uuid4()),
        username=Username(username),
        email=f"{username}@example.com",
        reputation=reputation,
    )
    return await user_repository.save(user)


def make_token(
    user_id: UUID,
    secret: str = TEST_JWT_SECRET,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    """Mint an identity-provider style token for a user."""
    return create_token(
        str(user_id), AuthSettings(jwt_secret=secret), expires_in=expires_in
    )


def question_fields(**overrides) -> dict:
    """Valid ask-question arguments, with overrides."""
    fields = {
        "title": "How do I cancel an asyncio task cleanly?",
        "description": "I start a task with create_task and need to stop it "
        "on shutdown without leaking the CancelledError.",
        "tags": ["python", "asyncio"],
    }
    fields.update(overrides)
    return fields


async def make_question(
    question_repository: QuestionRepository, author: User, **overrides
) -> Question:
    """Store a question by author and return it."""
    fields = question_fields(**overrides)
    question = Question(
        id=QuestionId(uuid4()),
        title=fields["title"],
        description=fields["description"],
        tags=[TagName(tag) for tag in fields["tags"]],
        author_id=author.id,
    )
    return await question_repository.save(question)


async def make_answer(
    answer_repository: AnswerRepository,
    question: Question,
    author_id: UUID,
    content: str = "Wrap the await in try/except CancelledError and re-raise.",
    is_ai_generated: bool = False,
) -> Answer:
    """Store an answer to question and return it."""
    answer = Answer(
        id=AnswerId(uuid4()),
        question_id=question.id,
        author_id=UserId(author_id),
        content=content,
        is_ai_generated=is_ai_generated,
    )
    return await answer_repository.save(answer)

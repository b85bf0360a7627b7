"""Mappers for converting between database rows and domain models.

Domain models are frozen pydantic models, so rows are mapped by hand rather
than through SQLAlchemy's imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from qna.domain.model import Answer, Notification, Question, User, Vote
from qna.domain.value import (
    AnswerId,
    NotificationId,
    NotificationType,
    QuestionId,
    TagName,
    TargetType,
    UserId,
    Username,
    UserRole,
    VoteId,
    VoteValue,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value is not None else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        email=row["email"],
        avatar_url=row.get("avatar_url"),
        role=UserRole(row["role"]),
        reputation=row["reputation"],
        answer_count=row["answer_count"],
        badge=row["badge"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "username": user.username.root,
        "email": user.email,
        "avatar_url": user.avatar_url,
        "role": user.role.value,
        "reputation": user.reputation,
        "answer_count": user.answer_count,
        "badge": user.badge,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_question(row: Dict[str, Any]) -> Question:
    """Convert database row to Question domain model.

    Args:
        row: Database row as dict

    Returns:
        Question domain model
    """
    accepted = _optional_uuid(row.get("accepted_answer_id"))
    return Question(
        id=QuestionId(_uuid(row["id"])),
        title=row["title"],
        description=row["description"],
        tags=[TagName(tag) for tag in row["tags"]],
        author_id=UserId(_uuid(row["author_id"])),
        vote_total=row["vote_total"],
        view_count=row["view_count"],
        answer_count=row["answer_count"],
        accepted_answer_id=AnswerId(accepted) if accepted else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def question_to_dict(question: Question) -> Dict[str, Any]:
    """Convert Question domain model to database dict."""
    return {
        "id": question.id,
        "title": question.title,
        "description": question.description,
        "tags": question.tag_names,
        "author_id": question.author_id,
        "vote_total": question.vote_total,
        "view_count": question.view_count,
        "answer_count": question.answer_count,
        "accepted_answer_id": question.accepted_answer_id,
        "created_at": question.created_at,
        "updated_at": question.updated_at,
    }


def row_to_answer(row: Dict[str, Any]) -> Answer:
    """Convert database row to Answer domain model."""
    return Answer(
        id=AnswerId(_uuid(row["id"])),
        question_id=QuestionId(_uuid(row["question_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        vote_total=row["vote_total"],
        is_accepted=row["is_accepted"],
        is_ai_generated=row["is_ai_generated"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def answer_to_dict(answer: Answer) -> Dict[str, Any]:
    """Convert Answer domain model to database dict."""
    return answer.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        target_type=TargetType(row["target_type"]),
        target_id=_uuid(row["target_id"]),
        value=VoteValue(row["value"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    The value is stored as the signed integer itself.
    """
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "target_type": vote.target_type.value,
        "target_id": vote.target_id,
        "value": int(vote.value),
        "created_at": vote.created_at,
    }


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    question_id = _optional_uuid(row.get("question_id"))
    answer_id = _optional_uuid(row.get("answer_id"))
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        type=NotificationType(row["type"]),
        title=row["title"],
        message=row["message"],
        is_read=row["is_read"],
        question_id=QuestionId(question_id) if question_id else None,
        answer_id=AnswerId(answer_id) if answer_id else None,
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    data = notification.model_dump()
    data["type"] = notification.type.value
    return data

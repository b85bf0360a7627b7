"""Answer entity."""

from datetime import datetime

from pydantic import Field, field_validator

from qna.domain.model.common import DomainModel, utc_now
from qna.domain.value import AnswerId, QuestionId, UserId


class Answer(DomainModel):
    """Answer to a question.

    ``question_id`` never changes after creation. At most one answer per
    question has ``is_accepted`` set, and it is the one the question's
    ``accepted_answer_id`` points to.
    """

    id: AnswerId
    question_id: QuestionId
    author_id: UserId  # AI_ASSISTANT_USER_ID for generated answers
    content: str = Field(max_length=50000)  # Rich text (HTML), opaque here
    vote_total: int = 0
    is_accepted: bool = False
    is_ai_generated: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Reject blank answers."""
        if not v.strip():
            raise ValueError("Answer must not be empty")
        return v

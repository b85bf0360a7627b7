"""Question aggregate root.

Questions are asked by a user, tagged by topic, voted on, viewed, and may
have one accepted answer.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from qna.domain.model.common import DomainModel, utc_now
from qna.domain.value import AnswerId, QuestionId, TagName, UserId

MIN_TITLE_LENGTH = 10
MIN_DESCRIPTION_LENGTH = 20
MAX_TAGS = 5


class Question(DomainModel):
    """Question aggregate root.

    Counters (``vote_total``, ``view_count``, ``answer_count``) and
    ``accepted_answer_id`` are only changed through atomic repository
    operations, never by saving a modified copy.
    """

    id: QuestionId
    title: str = Field(max_length=300)
    description: str = Field(max_length=50000)  # Rich text (HTML), opaque here
    tags: list[TagName]
    author_id: UserId
    vote_total: int = 0  # May be negative
    view_count: int = Field(default=0, ge=0)
    answer_count: int = Field(default=0, ge=0)
    accepted_answer_id: Optional[AnswerId] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("tags")
    @classmethod
    def deduplicate_tags(cls, v: list[TagName]) -> list[TagName]:
        """Drop repeated tags, keeping the first occurrence."""
        seen: set[str] = set()
        unique = []
        for tag in v:
            if tag.root not in seen:
                seen.add(tag.root)
                unique.append(tag)
        return unique

    @model_validator(mode="after")
    def validate_content(self) -> "Question":
        """Enforce minimum lengths and the tag count."""
        if len(self.title.strip()) < MIN_TITLE_LENGTH:
            raise ValueError(
                f"Title must be at least {MIN_TITLE_LENGTH} characters long"
            )
        if len(self.description.strip()) < MIN_DESCRIPTION_LENGTH:
            raise ValueError(
                f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters long"
            )
        if not self.tags:
            raise ValueError("Please add at least one tag")
        if len(self.tags) > MAX_TAGS:
            raise ValueError(f"A question can have at most {MAX_TAGS} tags")
        return self

    @property
    def tag_names(self) -> list[str]:
        """Tags as plain strings."""
        return [tag.root for tag in self.tags]

"""Unit tests for Question and TagName validation."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from qna.domain.model import Question
from qna.domain.value import QuestionId, TagName, UserId


def _question(**overrides) -> Question:
    fields = {
        "id": QuestionId(uuid4()),
        "title": "Why does my list comprehension leak?",
        "description": "A variable from the comprehension seems visible afterwards.",
        "tags": [TagName("python")],
        "author_id": UserId(uuid4()),
    }
    fields.update(overrides)
    return Question(**fields)


class TestTagName:
    """Tests for tag normalization."""

    def test_tag_is_trimmed_and_lowercased(self):
        assert TagName("  Python ").root == "python"

    @pytest.mark.parametrize("tag", ["c++", "c#", "node.js", "web-dev", "python3"])
    def test_symbols_used_by_real_tags_are_allowed(self, tag):
        assert TagName(tag).root == tag

    @pytest.mark.parametrize("tag", ["", "   ", "has space", "-leading", "a" * 36])
    def test_malformed_tags_are_rejected(self, tag):
        with pytest.raises(ValidationError):
            TagName(tag)


class TestQuestionValidation:
    """Tests for question content rules."""

    def test_valid_question(self):
        question = _question()

        assert question.vote_total == 0
        assert question.view_count == 0
        assert question.accepted_answer_id is None

    def test_title_shorter_than_ten_characters_is_rejected(self):
        with pytest.raises(ValidationError, match="Title must be at least 10"):
            _question(title="Too short")

    def test_title_length_counts_after_trimming(self):
        with pytest.raises(ValidationError, match="Title"):
            _question(title="   short     ")

    def test_description_shorter_than_twenty_characters_is_rejected(self):
        with pytest.raises(ValidationError, match="Description must be at least 20"):
            _question(description="Not enough here")

    def test_at_least_one_tag_is_required(self):
        with pytest.raises(ValidationError, match="at least one tag"):
            _question(tags=[])

    def test_more_than_five_tags_is_rejected(self):
        tags = [TagName(f"tag{i}") for i in range(6)]

        with pytest.raises(ValidationError, match="at most 5 tags"):
            _question(tags=tags)

    def test_duplicate_tags_are_collapsed_in_order(self):
        # Arrange
        tags = [TagName("python"), TagName("Python"), TagName("asyncio")]

        # Act
        question = _question(tags=tags)

        # Assert
        assert question.tag_names == ["python", "asyncio"]

    def test_questions_are_immutable(self):
        question = _question()

        with pytest.raises(ValidationError):
            question.vote_total = 10

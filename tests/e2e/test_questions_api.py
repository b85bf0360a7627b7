"""End-to-end tests for question and answer endpoints."""

from uuid import uuid4

import pytest

from tests.api_client import answer, ask, make_client, sign_up
from tests.factories import make_token


@pytest.fixture
def client(test_settings):
    """Create test client with test container."""
    return make_client(test_settings)


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "test"


class TestAskQuestion:
    """End-to-end tests for asking and reading questions."""

    def test_ask_without_auth_fails(self, client):
        # Act
        response = client.post(
            "/questions",
            json={"title": "A title long enough", "description": "Body", "tags": []},
        )

        # Assert
        assert response.status_code == 401
        assert "Authentication required" in response.json()["detail"]

    def test_ask_with_invalid_token_fails(self, client):
        response = client.post(
            "/questions",
            json={"title": "A title long enough", "description": "Body", "tags": []},
            cookies={"auth_token": "invalid-token"},
        )

        assert response.status_code == 401

    def test_ask_then_read(self, client):
        # Arrange
        _, cookies = sign_up(client, "alice")

        # Act
        asked = ask(client, cookies, tags=["Python", "python", "asyncio"])
        detail = client.get(f"/questions/{asked['question_id']}")

        # Assert
        assert asked["tags"] == ["python", "asyncio"]
        assert detail.status_code == 200
        body = detail.json()
        assert body["title"] == "How do I cancel an asyncio task cleanly?"
        assert body["view_count"] == 1
        assert body["answers"] == []

    def test_invalid_question_is_unprocessable(self, client):
        # Arrange
        _, cookies = sign_up(client, "alice")

        # Act
        response = client.post(
            "/questions",
            json={"title": "Short", "description": "Body", "tags": []},
            cookies=cookies,
        )

        # Assert
        assert response.status_code == 422
        assert response.json()["error"] == "ValidationError"

    def test_ask_without_profile_is_not_found(self, client):
        response = client.post(
            "/questions",
            json={
                "title": "A title long enough",
                "description": "Long enough body text for a question.",
                "tags": [],
            },
            cookies={"auth_token": make_token(uuid4())},
        )

        assert response.status_code == 404

    def test_missing_question(self, client):
        response = client.get(f"/questions/{uuid4()}")

        assert response.status_code == 404

    def test_feed_filters_and_sorts(self, client):
        # Arrange
        _, alice = sign_up(client, "alice")
        _, bob = sign_up(client, "bob")
        python_q = ask(client, alice)
        rust_q = ask(client, alice, tags=["rust"])
        answer(client, bob, python_q["question_id"])

        # Act
        unanswered = client.get("/questions", params={"filter": "unanswered"})
        tagged = client.get("/questions", params=[("tag", "rust"), ("tag", "go")])
        paged = client.get("/questions", params={"limit": 1})

        # Assert
        assert [q["question_id"] for q in unanswered.json()["questions"]] == [
            rust_q["question_id"]
        ]
        assert [q["question_id"] for q in tagged.json()["questions"]] == [
            rust_q["question_id"]
        ]
        assert paged.json()["total"] == 2
        assert len(paged.json()["questions"]) == 1

    def test_feed_limit_is_bounded(self, client):
        response = client.get("/questions", params={"limit": 0})

        assert response.status_code == 422


class TestAnswers:
    """End-to-end tests for answering and accepting."""

    def test_answer_then_accept_then_unaccept(self, client):
        # Arrange
        _, alice = sign_up(client, "alice")
        bob_id, bob = sign_up(client, "bob")
        question = ask(client, alice)
        posted = answer(client, bob, question["question_id"])

        # Act
        accepted = client.post(
            f"/questions/{question['question_id']}/accept",
            json={"answer_id": posted["answer_id"]},
            cookies=alice,
        )
        profile_after_accept = client.get("/users/bob").json()
        cleared = client.delete(
            f"/questions/{question['question_id']}/accept", cookies=alice
        )

        # Assert
        assert accepted.status_code == 200
        assert accepted.json()["accepted_answer_id"] == posted["answer_id"]
        assert accepted.json()["changed"] is True
        assert profile_after_accept["reputation"] == 15
        assert profile_after_accept["answer_count"] == 1
        assert cleared.json()["accepted_answer_id"] is None
        assert client.get("/users/bob").json()["reputation"] == 0

    def test_only_asker_may_accept(self, client):
        # Arrange
        _, alice = sign_up(client, "alice")
        _, bob = sign_up(client, "bob")
        question = ask(client, alice)
        posted = answer(client, bob, question["question_id"])

        # Act
        response = client.post(
            f"/questions/{question['question_id']}/accept",
            json={"answer_id": posted["answer_id"]},
            cookies=bob,
        )

        # Assert
        assert response.status_code == 403
        detail = client.get(f"/questions/{question['question_id']}").json()
        assert detail["accepted_answer_id"] is None

    def test_accepting_answer_of_another_question(self, client):
        # Arrange
        _, alice = sign_up(client, "alice")
        _, bob = sign_up(client, "bob")
        first = ask(client, alice)
        second = ask(client, alice, title="Why does my event loop block?")
        foreign = answer(client, bob, second["question_id"])

        # Act
        response = client.post(
            f"/questions/{first['question_id']}/accept",
            json={"answer_id": foreign["answer_id"]},
            cookies=alice,
        )

        # Assert
        assert response.status_code == 422

    def test_ai_answer_is_stored_but_not_acceptable(self, client):
        # Arrange
        _, alice = sign_up(client, "alice")
        question = ask(client, alice)

        # Act
        recorded = client.post(
            f"/questions/{question['question_id']}/answers/ai",
            json={"content": "<p>Use <code>asyncio.timeout</code>.</p>"},
            cookies=alice,
        )
        accept = client.post(
            f"/questions/{question['question_id']}/accept",
            json={"answer_id": recorded.json()["answer_id"]},
            cookies=alice,
        )

        # Assert
        assert recorded.status_code == 201
        assert recorded.json()["is_ai_generated"] is True
        assert accept.status_code == 422
        assert accept.json()["error"] == "BusinessRuleViolationError"

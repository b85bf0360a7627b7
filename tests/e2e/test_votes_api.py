"""End-to-end tests for vote endpoints."""

from uuid import uuid4

import pytest

from tests.api_client import answer, ask, make_client, sign_up


@pytest.fixture
def client(test_settings):
    """Create test client with test container."""
    return make_client(test_settings)


class TestVoting:
    """End-to-end tests for casting votes."""

    def test_vote_without_auth_fails(self, client):
        response = client.post(f"/questions/{uuid4()}/vote", json={"value": 1})

        assert response.status_code == 401

    def test_vote_value_must_be_plus_or_minus_one(self, client):
        _, cookies = sign_up(client, "alice")

        response = client.post(
            f"/questions/{uuid4()}/vote", json={"value": 2}, cookies=cookies
        )

        assert response.status_code == 422

    def test_toggle_and_flip(self, client):
        # Arrange
        _, alice = sign_up(client, "alice")
        _, bob = sign_up(client, "bob")
        question = ask(client, alice)
        url = f"/questions/{question['question_id']}/vote"

        # Act
        up = client.post(url, json={"value": 1}, cookies=bob).json()
        revoked = client.post(url, json={"value": 1}, cookies=bob).json()
        down = client.post(url, json={"value": -1}, cookies=bob).json()
        flipped = client.post(url, json={"value": 1}, cookies=bob).json()

        # Assert
        assert (up["action"], up["vote_total"], up["user_vote"]) == ("cast", 1, 1)
        assert (revoked["action"], revoked["vote_total"]) == ("revoked", 0)
        assert revoked["user_vote"] is None
        assert (down["vote_total"], down["user_vote"]) == (-1, -1)
        assert (flipped["action"], flipped["delta"]) == ("flipped", 2)
        assert flipped["vote_total"] == 1

        feed = client.get("/questions", cookies=bob).json()
        assert feed["questions"][0]["user_vote"] == 1
        # The downvote was clamped at 0, so the flip nets the full +10
        assert client.get("/users/alice").json()["reputation"] == 10

    def test_self_vote_is_forbidden(self, client):
        # Arrange
        _, alice = sign_up(client, "alice")
        question = ask(client, alice)

        # Act
        response = client.post(
            f"/questions/{question['question_id']}/vote",
            json={"value": 1},
            cookies=alice,
        )

        # Assert
        assert response.status_code == 403
        assert response.json()["error"] == "PermissionDeniedError"

    def test_vote_on_answer(self, client):
        # Arrange
        _, alice = sign_up(client, "alice")
        _, bob = sign_up(client, "bob")
        question = ask(client, alice)
        posted = answer(client, bob, question["question_id"])

        # Act
        response = client.post(
            f"/answers/{posted['answer_id']}/vote", json={"value": 1}, cookies=alice
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["target_type"] == "answer"
        assert client.get("/users/bob").json()["reputation"] == 10

    def test_vote_on_missing_answer(self, client):
        _, alice = sign_up(client, "alice")

        response = client.post(
            f"/answers/{uuid4()}/vote", json={"value": -1}, cookies=alice
        )

        assert response.status_code == 404

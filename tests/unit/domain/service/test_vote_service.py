"""Unit tests for VoteService."""

import asyncio
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from qna.config import PolicySettings, Settings
from qna.domain.error import ConflictError, NotFoundError, PermissionDeniedError
from qna.domain.repository import (
    AnswerRepository,
    QuestionRepository,
    UserRepository,
    VoteRepository,
)
from qna.domain.service import VoteAction, VoteService
from qna.domain.value import AI_ASSISTANT_USER_ID, TargetType, UserId, VoteValue
from tests.factories import make_answer, make_question, make_user
from tests.harness import create_app_container_fixture, create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()
app_env = create_app_container_fixture()
self_voting_env = create_env_fixture(
    settings=Settings(policy=PolicySettings(allow_self_voting=True))
)


async def _question_by_new_author(env):
    users = await env.get(UserRepository)
    questions = await env.get(QuestionRepository)
    author = await make_user(users, f"asker{uuid4().hex[:8]}")
    question = await make_question(questions, author)
    return author, question


async def _voter(env) -> UserId:
    users = await env.get(UserRepository)
    return (await make_user(users, f"voter{uuid4().hex[:8]}")).id


class TestCastVote:
    """Tests for the cast / revoke / flip transitions."""

    @pytest.mark.asyncio
    async def test_upvote_then_same_again_then_down_then_flip(self, unit_env):
        """+1 -> 1, +1 again -> 0, -1 -> -1, +1 -> 1."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        questions = await unit_env.get(QuestionRepository)
        _, question = await _question_by_new_author(unit_env)
        voter = await _voter(unit_env)

        # Act & Assert
        first = await vote_service.cast_vote(
            voter, TargetType.QUESTION, question.id, VoteValue.UP
        )
        assert (first.action, first.delta, first.vote_total) == (VoteAction.CAST, 1, 1)
        assert first.user_vote == VoteValue.UP

        revoked = await vote_service.cast_vote(
            voter, TargetType.QUESTION, question.id, VoteValue.UP
        )
        assert (revoked.action, revoked.delta, revoked.vote_total) == (
            VoteAction.REVOKED,
            -1,
            0,
        )
        assert revoked.user_vote is None

        down = await vote_service.cast_vote(
            voter, TargetType.QUESTION, question.id, VoteValue.DOWN
        )
        assert (down.action, down.delta, down.vote_total) == (VoteAction.CAST, -1, -1)

        flipped = await vote_service.cast_vote(
            voter, TargetType.QUESTION, question.id, VoteValue.UP
        )
        assert (flipped.action, flipped.delta, flipped.vote_total) == (
            VoteAction.FLIPPED,
            2,
            1,
        )

        stored = await questions.find_by_id(question.id)
        assert stored.vote_total == 1

    @pytest.mark.asyncio
    async def test_total_always_equals_ledger_sum(self, unit_env):
        """vote_total matches the sum of stored votes after any sequence."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        _, question = await _question_by_new_author(unit_env)
        voters = [await _voter(unit_env) for _ in range(3)]
        sequence = [
            (voters[0], VoteValue.UP),
            (voters[1], VoteValue.DOWN),
            (voters[2], VoteValue.UP),
            (voters[1], VoteValue.UP),
            (voters[0], VoteValue.UP),
            (voters[2], VoteValue.DOWN),
        ]

        # Act & Assert
        for voter, value in sequence:
            outcome = await vote_service.cast_vote(
                voter, TargetType.QUESTION, question.id, value
            )
            ledger_sum = await vote_repo.sum_by_target(TargetType.QUESTION, question.id)
            assert outcome.vote_total == ledger_sum

    @pytest.mark.asyncio
    async def test_vote_on_answer_updates_answer_total(self, unit_env):
        """Answer votes go to the answer, not its question."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        answers = await unit_env.get(AnswerRepository)
        questions = await unit_env.get(QuestionRepository)
        _, question = await _question_by_new_author(unit_env)
        answer = await make_answer(answers, question, uuid4())

        # Act
        outcome = await vote_service.cast_vote(
            await _voter(unit_env), TargetType.ANSWER, answer.id, VoteValue.DOWN
        )

        # Assert
        assert outcome.vote_total == -1
        assert (await answers.find_by_id(answer.id)).vote_total == -1
        assert (await questions.find_by_id(question.id)).vote_total == 0

    @pytest.mark.asyncio
    async def test_vote_on_missing_target_raises_not_found(self, unit_env):
        """Votes need an existing target, and nothing is recorded otherwise."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        voter = await _voter(unit_env)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await vote_service.cast_vote(
                voter, TargetType.ANSWER, uuid4(), VoteValue.UP
            )
        assert await vote_repo.find_by_user(voter) == []

    @pytest.mark.asyncio
    async def test_self_vote_is_rejected_by_default(self, unit_env):
        """Authors cannot vote on their own content."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        questions = await unit_env.get(QuestionRepository)
        author, question = await _question_by_new_author(unit_env)

        # Act & Assert
        with pytest.raises(PermissionDeniedError):
            await vote_service.cast_vote(
                author.id, TargetType.QUESTION, question.id, VoteValue.UP
            )
        assert (await questions.find_by_id(question.id)).vote_total == 0

    @pytest.mark.asyncio
    async def test_self_vote_allowed_when_policy_permits(self, self_voting_env):
        """Deployments may allow voting on your own content."""
        # Arrange
        vote_service = await self_voting_env.get(VoteService)
        author, question = await _question_by_new_author(self_voting_env)

        # Act
        outcome = await vote_service.cast_vote(
            author.id, TargetType.QUESTION, question.id, VoteValue.UP
        )

        # Assert
        assert outcome.vote_total == 1

    @pytest.mark.asyncio
    async def test_voter_without_profile_is_not_found(self, unit_env):
        """Only registered users vote; nothing is recorded for anyone else."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        questions = await unit_env.get(QuestionRepository)
        _, question = await _question_by_new_author(unit_env)
        unregistered = UserId(uuid4())

        # Act & Assert
        with pytest.raises(NotFoundError, match="User"):
            await vote_service.cast_vote(
                unregistered, TargetType.QUESTION, question.id, VoteValue.UP
            )
        assert await vote_repo.find_by_user(unregistered) == []
        assert (await questions.find_by_id(question.id)).vote_total == 0

    @pytest.mark.asyncio
    async def test_duplicate_insert_is_a_conflict(self, unit_env, monkeypatch):
        """A racing insert rejected by the unique constraint changes nothing."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        questions = await unit_env.get(QuestionRepository)
        users = await unit_env.get(UserRepository)
        author, question = await _question_by_new_author(unit_env)
        voter = await _voter(unit_env)

        async def rejected_save(vote):
            raise IntegrityError("INSERT INTO votes", {}, Exception("uq_user_target_vote"))

        monkeypatch.setattr(vote_service.vote_repository, "save", rejected_save)

        # Act & Assert
        with pytest.raises(ConflictError):
            await vote_service.cast_vote(
                voter, TargetType.QUESTION, question.id, VoteValue.UP
            )
        assert await vote_repo.find_by_user(voter) == []
        assert (await questions.find_by_id(question.id)).vote_total == 0
        assert (await users.find_by_id(author.id)).reputation == 0


class TestReputation:
    """Tests for reputation awarded by votes."""

    @pytest.mark.asyncio
    async def test_question_upvote_awards_question_points(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        users = await unit_env.get(UserRepository)
        author, question = await _question_by_new_author(unit_env)

        # Act
        await vote_service.cast_vote(
            await _voter(unit_env), TargetType.QUESTION, question.id, VoteValue.UP
        )

        # Assert
        assert (await users.find_by_id(author.id)).reputation == 5

    @pytest.mark.asyncio
    async def test_answer_flip_moves_reputation_twice(self, unit_env):
        """Flipping down to up is worth two upvotes on top of the downvote."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        users = await unit_env.get(UserRepository)
        answers = await unit_env.get(AnswerRepository)
        _, question = await _question_by_new_author(unit_env)
        answerer = await make_user(users, "answerer", reputation=50)
        answer = await make_answer(answers, question, answerer.id)
        voter = await _voter(unit_env)

        # Act
        await vote_service.cast_vote(voter, TargetType.ANSWER, answer.id, VoteValue.DOWN)
        after_down = (await users.find_by_id(answerer.id)).reputation
        await vote_service.cast_vote(voter, TargetType.ANSWER, answer.id, VoteValue.UP)
        after_flip = (await users.find_by_id(answerer.id)).reputation

        # Assert
        assert after_down == 40
        assert after_flip == 60

    @pytest.mark.asyncio
    async def test_reputation_never_goes_below_zero(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        users = await unit_env.get(UserRepository)
        author, question = await _question_by_new_author(unit_env)

        # Act
        await vote_service.cast_vote(
            await _voter(unit_env), TargetType.QUESTION, question.id, VoteValue.DOWN
        )

        # Assert
        assert (await users.find_by_id(author.id)).reputation == 0

    @pytest.mark.asyncio
    async def test_ai_assistant_collects_no_reputation(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        users = await unit_env.get(UserRepository)
        answers = await unit_env.get(AnswerRepository)
        _, question = await _question_by_new_author(unit_env)
        ai_answer = await make_answer(
            answers, question, AI_ASSISTANT_USER_ID, is_ai_generated=True
        )

        # Act
        outcome = await vote_service.cast_vote(
            await _voter(unit_env), TargetType.ANSWER, ai_answer.id, VoteValue.UP
        )

        # Assert
        assert outcome.vote_total == 1
        assert (await users.find_by_id(AI_ASSISTANT_USER_ID)).reputation == 0


class TestCompensation:
    """A failure after the ledger write leaves no trace."""

    @pytest.mark.asyncio
    async def test_reputation_failure_undoes_vote_and_total(
        self, unit_env, monkeypatch
    ):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        questions = await unit_env.get(QuestionRepository)
        _, question = await _question_by_new_author(unit_env)
        voter = await _voter(unit_env)

        async def broken_adjust(user_id, delta):
            raise RuntimeError("reputation store down")

        monkeypatch.setattr(
            vote_service.user_service, "adjust_reputation", broken_adjust
        )

        # Act
        with pytest.raises(RuntimeError, match="reputation store down"):
            await vote_service.cast_vote(
                voter, TargetType.QUESTION, question.id, VoteValue.UP
            )

        # Assert
        assert await vote_repo.find_by_user(voter) == []
        assert (await questions.find_by_id(question.id)).vote_total == 0

    @pytest.mark.asyncio
    async def test_counter_failure_restores_revoked_vote(self, unit_env, monkeypatch):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        questions = await unit_env.get(QuestionRepository)
        _, question = await _question_by_new_author(unit_env)
        voter = await _voter(unit_env)
        await vote_service.cast_vote(voter, TargetType.QUESTION, question.id, VoteValue.UP)

        async def broken_delta(target_type, target_id, delta):
            raise RuntimeError("counter unavailable")

        monkeypatch.setattr(
            vote_service.counter_service, "apply_vote_delta", broken_delta
        )

        # Act
        with pytest.raises(RuntimeError):
            await vote_service.cast_vote(
                voter, TargetType.QUESTION, question.id, VoteValue.UP
            )

        # Assert
        vote = await vote_repo.find_by_user_and_target(
            voter, TargetType.QUESTION, question.id
        )
        assert vote is not None
        assert vote.value == VoteValue.UP
        assert (await questions.find_by_id(question.id)).vote_total == 1

    @pytest.mark.asyncio
    async def test_counter_failure_restores_flipped_vote(self, unit_env, monkeypatch):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        _, question = await _question_by_new_author(unit_env)
        voter = await _voter(unit_env)
        await vote_service.cast_vote(
            voter, TargetType.QUESTION, question.id, VoteValue.DOWN
        )

        async def broken_delta(target_type, target_id, delta):
            raise RuntimeError("counter unavailable")

        monkeypatch.setattr(
            vote_service.counter_service, "apply_vote_delta", broken_delta
        )

        # Act
        with pytest.raises(RuntimeError):
            await vote_service.cast_vote(
                voter, TargetType.QUESTION, question.id, VoteValue.UP
            )

        # Assert
        vote = await vote_repo.find_by_user_and_target(
            voter, TargetType.QUESTION, question.id
        )
        assert vote.value == VoteValue.DOWN


class TestConcurrentVotes:
    """Concurrent requests never lose an update."""

    @pytest.mark.asyncio
    async def test_many_voters_at_once(self, app_env):
        """N distinct upvotes in parallel give a total of N."""
        # Arrange
        async with app_env() as setup:
            _, question = await _question_by_new_author(setup)
            voters = [await _voter(setup) for _ in range(25)]

        async def vote(voter):
            async with app_env() as request_container:
                vote_service = await request_container.get(VoteService)
                return await vote_service.cast_vote(
                    voter, TargetType.QUESTION, question.id, VoteValue.UP
                )

        # Act
        await asyncio.gather(*(vote(voter) for voter in voters))

        # Assert
        async with app_env() as check:
            questions = await check.get(QuestionRepository)
            vote_repo = await check.get(VoteRepository)
            stored = await questions.find_by_id(question.id)
            assert stored.vote_total == 25
            assert await vote_repo.sum_by_target(TargetType.QUESTION, question.id) == 25

    @pytest.mark.asyncio
    async def test_same_user_double_submit_stays_consistent(self, app_env):
        """Two identical casts by one user end as cast-then-revoke."""
        # Arrange
        async with app_env() as setup:
            _, question = await _question_by_new_author(setup)
            voter = await _voter(setup)

        async def vote():
            async with app_env() as request_container:
                vote_service = await request_container.get(VoteService)
                return await vote_service.cast_vote(
                    voter, TargetType.QUESTION, question.id, VoteValue.UP
                )

        # Act
        outcomes = await asyncio.gather(vote(), vote())

        # Assert
        assert sorted(o.action.value for o in outcomes) == ["cast", "revoked"]
        async with app_env() as check:
            questions = await check.get(QuestionRepository)
            vote_repo = await check.get(VoteRepository)
            total = (await questions.find_by_id(question.id)).vote_total
            assert total == await vote_repo.sum_by_target(
                TargetType.QUESTION, question.id
            )
            assert total == 0


class TestGetUserVotes:
    """Tests for the batch vote lookup."""

    @pytest.mark.asyncio
    async def test_returns_only_voted_targets(self, unit_env):
        # Arrange
        vote_service = await unit_env.get(VoteService)
        _, first = await _question_by_new_author(unit_env)
        _, second = await _question_by_new_author(unit_env)
        voter = await _voter(unit_env)
        await vote_service.cast_vote(voter, TargetType.QUESTION, first.id, VoteValue.DOWN)

        # Act
        votes = await vote_service.get_user_votes(
            voter, TargetType.QUESTION, [first.id, second.id]
        )

        # Assert
        assert votes == {first.id: VoteValue.DOWN}

    @pytest.mark.asyncio
    async def test_empty_target_list(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        assert await vote_service.get_user_votes(uuid4(), TargetType.ANSWER, []) == {}

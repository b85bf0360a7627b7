"""Test harness for unit and E2E tests.

Unit tests run against the in-memory persistence component and need no
services. Settings can be pinned per fixture instead of read from the
environment.
"""

import pytest_asyncio

from qna.config import Settings
from qna.util.di import Component
from tests.di import build_test_container


def create_env_fixture(
    unmock: set[Component] | None = None,
    settings: Settings | None = None,
):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields a request-scoped container for service access

    Args:
        unmock: Components to use real implementations for
        settings: Settings to inject, defaults to the environment's

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_ask_question(unit_env):
            service = await unit_env.get(QuestionService)
            question = await service.ask_question(...)
            assert question.vote_total == 0
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set(), settings=settings)

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def create_app_container_fixture(
    unmock: set[Component] | None = None,
    settings: Settings | None = None,
):
    """Factory for fixtures yielding the APP-scoped container itself.

    Tests that simulate several concurrent requests open one request scope
    per simulated request; all of them share the same store.

    Usage:
        app_env = create_app_container_fixture()

        @pytest.mark.asyncio
        async def test_concurrent_votes(app_env):
            async def one_request():
                async with app_env() as request_container:
                    ...
    """

    @pytest_asyncio.fixture
    async def _app_container():
        container = build_test_container(unmock=unmock or set(), settings=settings)
        yield container
        await container.close()

    return _app_container

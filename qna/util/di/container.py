"""Container construction and FastAPI integration."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from qna.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container.

    Settings come from the environment. ``FastapiProvider`` exposes the
    current ``Request`` so the session provider can see whether an error
    handler marked the request rollback-only.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container to the app, replacing any attached before.

    Tests call this on an app from ``create_app`` to swap in a container with
    in-memory persistence.
    """
    setup_dishka(container, app)


async def close_di(app: FastAPI) -> None:
    """Close the app's container, disposing the database engine."""
    await app.state.dishka_container.close()

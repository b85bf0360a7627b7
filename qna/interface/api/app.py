"""FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qna.config import Settings
from qna.interface.api.errors import register_error_handlers
from qna.interface.api.routes import (
    health,
    notifications,
    questions,
    users,
    votes,
)
from qna.interface.api.routes.health import API_VERSION
from qna.util.di.container import close_di, create_container, setup_di
from qna.util.logging import setup_logging
from qna.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release the database engine when the server stops."""
    yield
    await close_di(app)


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    settings = Settings()
    setup_logging(settings)

    app_instance = FastAPI(
        title="Q&A API",
        description="Backend API for a community Q&A site with voting, "
        "accepted answers, reputation and badges",
        version=API_VERSION,
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,  # Auth token travels in a cookie
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    container = create_container()
    setup_di(app_instance, container)

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(users.router)
    app_instance.include_router(questions.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(notifications.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()

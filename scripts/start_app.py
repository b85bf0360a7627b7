#!/usr/bin/env python3
"""Serve the Q&A API with uvicorn.

Logfire is configured here, before the app module is imported, so failures
while building the app are reported too.
"""

import sys

import logfire
import uvicorn

from qna.config import Settings
from qna.util.observability import configure_logfire


def main() -> int:
    """Start uvicorn on the configured port."""
    settings = Settings()
    configure_logfire(settings)

    logfire.info(
        "Starting Q&A API",
        port=settings.port,
        environment=settings.environment,
        git_sha=settings.git_sha,
    )
    try:
        uvicorn.run(
            "qna.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=settings.environment != "development",
        )
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())

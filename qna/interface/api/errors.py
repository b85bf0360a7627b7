"""Map domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from qna.domain.error import (
    BusinessRuleViolationError,
    ConflictError,
    DomainError,
    NotFoundError,
    PermissionDeniedError,
    TransientError,
    ValidationError,
)
from qna.domain.value import UserId
from qna.util.di.infrastructure.persistence import ROLLBACK_ONLY

# Most specific first; the first match wins. 422 is spelled out because
# Starlette renamed its constant between releases.
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, 422),
    (BusinessRuleViolationError, 422),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (TransientError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Turn a domain error into a JSON error response.

    The request's transaction is marked rollback-only, so partial writes made
    before the error are discarded even though the request "succeeds".
    """
    setattr(request.state, ROLLBACK_ONLY, True)

    status_code = status_for(exc)
    if status_code >= 500:
        logfire.error(
            "Request failed with transient error",
            path=request.url.path,
            error=str(exc),
        )
    else:
        logfire.info(
            "Request rejected",
            path=request.url.path,
            status_code=status_code,
            error_type=type(exc).__name__,
            error=str(exc),
        )

    headers = {"Retry-After": "1"} if isinstance(exc, TransientError) else None
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__},
        headers=headers,
    )


def require_user(user_id: UserId | None, action: str) -> UserId:
    """Return the authenticated user ID or fail with 401.

    Args:
        user_id: User ID taken from the auth cookie, if valid
        action: What the caller tried to do, for the error message

    Raises:
        HTTPException: If the caller is not authenticated
    """
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id


def register_error_handlers(app: FastAPI) -> None:
    """Register domain error handlers on the app."""
    app.add_exception_handler(DomainError, domain_error_handler)

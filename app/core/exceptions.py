"""
Typed API errors and the handlers that render them.

Every error leaves the service as JSON of the form
{"detail": <message>, "error": <ERROR_CODE>}.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class JobPortalError(HTTPException):
    """Base class for errors with a fixed status code and error code."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"

    def __init__(self, detail: Any = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(status_code=type(self).status_code, detail=detail, headers=headers)


class AuthenticationError(JobPortalError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTHENTICATION_FAILURE"

    def __init__(self, detail: Any = "Authentication required"):
        super().__init__(detail=detail, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(JobPortalError):
    """Authenticated, but the role or ownership check failed."""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "AUTHORIZATION_FAILURE"

    def __init__(self, detail: Any = "You do not have permission to perform this action"):
        super().__init__(detail=detail)


class NotFoundError(JobPortalError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class ConflictError(JobPortalError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"


class ValidationFailure(JobPortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_FAILURE"


async def job_portal_error_handler(request: Request, exc: JobPortalError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": jsonable_encoder(exc.detail), "error": exc.error_code},
        headers=exc.headers,
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed input is reported as 400 VALIDATION_FAILURE instead of 422."""
    logger.info(f"Rejected malformed request to {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors()), "error": ValidationFailure.error_code},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JobPortalError, job_portal_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

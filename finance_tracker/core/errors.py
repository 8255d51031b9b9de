# finance_tracker/core/errors.py
"""
Classified API errors and the handlers that turn them into JSON responses.

Every error body has the same shape: ``{"error": <message>, "code": <CODE>}``.
Clients key off ``code``; ``error`` is for humans only.
"""
import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class APIError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    headers: Optional[Dict[str, str]] = None

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def to_body(self) -> Dict[str, str]:
        return {"error": self.message, "code": self.code}


class BadRequestError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class NotFoundError(APIError):
    # Also used for rows owned by someone else, so their existence is never revealed
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(APIError):
    status_code = status.HTTP_409_CONFLICT


class ServerConfigurationError(APIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Server is not configured correctly"):
        super().__init__("SERVER_CONFIGURATION_ERROR", message)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    if isinstance(exc, ServerConfigurationError):
        logger.error(f"Configuration error on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_body(),
        headers=exc.headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Request could not be parsed", "code": "INVALID_REQUEST"},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    # Unique constraints backing the pre-insert duplicate checks
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"error": "Resource conflicts with an existing record", "code": "CONFLICT"},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "code": "INTERNAL_ERROR"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

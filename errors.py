# errors.py

import logging
from enum import IntEnum
from typing import Optional

from fastapi import FastAPI, Request, status

from middleware import finish_response

logger = logging.getLogger(__name__)


class ErrorCode(IntEnum):
    BAD_REQUEST = 10000
    SERVER_ERROR = 10001
    NOT_FOUND = 10002


DEFAULT_MESSAGES = {
    ErrorCode.BAD_REQUEST: "Bad request",
    ErrorCode.SERVER_ERROR: "Internal server error",
    ErrorCode.NOT_FOUND: "Resource not found",
}


class BizError(Exception):
    """Error carried by a failure envelope."""

    def __init__(self, code: ErrorCode, message: Optional[str] = None):
        self.code = code
        self.message = message or DEFAULT_MESSAGES[code]
        super().__init__(self.message)


class BindError(Exception):
    """Raised when a request payload cannot be decoded into a DTO."""


class ServiceError(Exception):
    """Raised by the service layer. The message is shown to the client verbatim."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(ServiceError):
    """Raised when the requested record does not exist."""


def register_error_handlers(app: FastAPI) -> None:
    """Register the catch-all handler for exceptions the handlers don't expect."""
    from responses import fail  # responses imports this module

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        response = fail(request, status.HTTP_500_INTERNAL_SERVER_ERROR, BizError(ErrorCode.SERVER_ERROR))
        # Raised past the request middleware, so stamp the request id here
        return finish_response(request, response)

# responses.py

import logging
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from binding import bind
from errors import BindError, BizError, ErrorCode, NotFoundError, ServiceError
from result import Result
from validator import validate

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=BaseModel)


def _render(request: Request, status_code: int, result: Result) -> JSONResponse:
    # Requests that bypassed the middleware (e.g. unit tests) still get metadata
    request_id = getattr(request.state, "request_id", "")
    time_stamp = getattr(request.state, "time_stamp", 0)
    return JSONResponse(status_code=status_code, content=result.to_payload(request_id, time_stamp))


def success(request: Request, data: Any) -> JSONResponse:
    return _render(request, status.HTTP_200_OK, Result.success(data))


def fail(
    request: Request,
    status_code: int,
    error: BizError,
    field_errors: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return _render(request, status_code, Result.failure(error, field_errors))


def service_failure(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a service-layer error as a 500 carrying its message."""
    logger.error(f"{request.url.path} - service error: {exc.message}")
    return fail(request, status.HTTP_500_INTERNAL_SERVER_ERROR, BizError(ErrorCode.SERVER_ERROR, exc.message))


def lookup_failure(request: Request, exc: ServiceError) -> JSONResponse:
    """Like service_failure, but a missing record is a 404."""
    if isinstance(exc, NotFoundError):
        logger.warning(f"{request.url.path} - not found: {exc.message}")
        return fail(request, status.HTTP_404_NOT_FOUND, BizError(ErrorCode.NOT_FOUND, exc.message))
    return service_failure(request, exc)


async def bind_and_validate(
    request: Request, dto_type: Type[D]
) -> Tuple[Optional[D], Optional[JSONResponse]]:
    """Bind and validate a DTO.

    Returns ``(dto, None)`` on success, or ``(None, response)`` where the
    response is the 400 envelope to send back.
    """
    try:
        req = await bind(request, dto_type)
    except BindError as e:
        logger.warning(f"{request.url.path} - bind error: {e}")
        return None, fail(request, status.HTTP_400_BAD_REQUEST, BizError(ErrorCode.BAD_REQUEST, str(e)))

    errors = validate(req)
    if errors:
        logger.warning(f"{request.url.path} - validation failed: {errors}")
        return None, fail(request, status.HTTP_400_BAD_REQUEST, BizError(ErrorCode.BAD_REQUEST), errors)

    return req, None

# middleware.py

import logging
import time
import uuid

from fastapi import FastAPI, Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def finish_response(request: Request, response: Response) -> Response:
    """Echo the request id on ``response`` and write the access log line."""
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        return response

    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        "%s %s -> %d (%.1f ms) [%s]",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - request.state.started) * 1000,
        request_id,
    )
    return response


def add_request_context(app: FastAPI) -> None:
    """Attach a request id and timestamp to every request and log its outcome."""

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.time_stamp = int(time.time())
        request.state.started = time.perf_counter()

        response = await call_next(request)
        return finish_response(request, response)

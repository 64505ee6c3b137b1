from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"


class RequestIDLoggingMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id and log it on the way in and out.

    The id comes from the caller's ``x-request-id`` header when present,
    otherwise a fresh one is minted. It is stored on ``request.state`` for
    the error handlers and echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        fields = {"request_id": request_id, "method": request.method, "path": request.url.path}

        logger.info("request", extra=fields)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request failed", extra=fields)
            raise
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "response",
            extra={
                **fields,
                "status_code": response.status_code,
                "duration_ms": int((time.perf_counter() - started) * 1000),
            },
        )
        return response

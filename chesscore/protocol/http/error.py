from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Type

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException

from ...engine.errors import ChessError, EmptySearch, IllegalMove, MalformedNotation


logger = logging.getLogger(__name__)

ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_409_CONFLICT: "conflict",
    422: "unprocessable_entity",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "internal_error",
}

# First match wins, so subclasses go before ChessError
CHESS_ERROR_STATUS: Tuple[Tuple[Type[ChessError], int], ...] = (
    (MalformedNotation, status.HTTP_400_BAD_REQUEST),
    (IllegalMove, status.HTTP_400_BAD_REQUEST),
    (EmptySearch, status.HTTP_409_CONFLICT),
    (ChessError, status.HTTP_400_BAD_REQUEST),
)


def error_envelope(
    *,
    code: str,
    message: str,
    err_type: str,
    request_id: str,
    field_errors: Optional[List[Dict[str, str]]] = None,
) -> Dict[str, Any]:
    """Body shared by every error response."""
    error: Dict[str, Any] = {
        "code": code,
        "message": message,
        "type": err_type,
        "request_id": request_id,
    }
    if field_errors:
        error["field_errors"] = field_errors
    return {"error": error}


def _respond(
    request: Request,
    status_code: int,
    message: str,
    field_errors: Optional[List[Dict[str, str]]] = None,
) -> JSONResponse:
    body = error_envelope(
        code=ERROR_CODES.get(status_code, "error"),
        message=message,
        err_type="server_error" if status_code >= 500 else "client_error",
        request_id=getattr(request.state, "request_id", ""),
        field_errors=field_errors,
    )
    return JSONResponse(status_code=status_code, content=body)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, HTTPException):
        return _respond(request, exc.status_code, str(exc.detail))
    return await exception_handler(request, exc)


async def chess_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Engine errors leave the session's game as it was; report them as client errors."""
    status_code = next((code for kind, code in CHESS_ERROR_STATUS if isinstance(exc, kind)), None)
    if status_code is None:
        return await exception_handler(request, exc)
    logger.info(
        "rejected: %s",
        exc,
        extra={"request_id": getattr(request.state, "request_id", ""), "status_code": status_code},
    )
    return _respond(request, status_code, str(exc))


async def request_validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    if not isinstance(exc, RequestValidationError):
        return await exception_handler(request, exc)
    field_errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "code": err.get("type", "value_error"),
            "message": err.get("msg", "invalid value"),
        }
        for err in exc.errors()
    ]
    return _respond(request, 422, "Validation error", field_errors)


async def exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled exception", extra={"request_id": getattr(request.state, "request_id", "")}
    )
    return _respond(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")

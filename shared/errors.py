"""
Error taxonomy shared by every procedure.

Handlers raise ProcedureError with one of the codes below; the exception
handlers registered in main.py turn it into
{"error": {"code": ..., "message": ..., "reason": ...}} with the mapped HTTP
status. Nothing is retried.
"""
from typing import Optional

import structlog
from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)

BAD_REQUEST = "BAD_REQUEST"
UNAUTHENTICATED = "UNAUTHENTICATED"
FORBIDDEN = "FORBIDDEN"
NOT_FOUND = "NOT_FOUND"
CONFLICT = "CONFLICT"
TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"
INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"

STATUS_BY_CODE = {
    BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    FORBIDDEN: status.HTTP_403_FORBIDDEN,
    NOT_FOUND: status.HTTP_404_NOT_FOUND,
    CONFLICT: status.HTTP_409_CONFLICT,
    TOO_MANY_REQUESTS: status.HTTP_429_TOO_MANY_REQUESTS,
    INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

CODE_BY_STATUS = {value: key for key, value in STATUS_BY_CODE.items()}


class ProcedureError(HTTPException):
    """A failure surfaced verbatim to the caller."""

    def __init__(self, code: str, message: str, reason: Optional[str] = None):
        if code not in STATUS_BY_CODE:
            raise ValueError(f"Unknown error code: {code}")
        headers = {"WWW-Authenticate": "Bearer"} if code == UNAUTHENTICATED else None
        super().__init__(status_code=STATUS_BY_CODE[code], detail=message, headers=headers)
        self.code = code
        self.message = message
        self.reason = reason

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "reason": self.reason}


def bad_request(message: str, reason: Optional[str] = None) -> ProcedureError:
    return ProcedureError(BAD_REQUEST, message, reason)


def not_found(message: str) -> ProcedureError:
    return ProcedureError(NOT_FOUND, message)


def _error_response(status_code: int, body: dict, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": body}, headers=headers)


async def procedure_error_handler(request: Request, exc: ProcedureError) -> JSONResponse:
    return _error_response(exc.status_code, exc.to_dict(), exc.headers)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework-raised HTTPExceptions (404 on unknown routes, 405, ...)."""
    code = CODE_BY_STATUS.get(exc.status_code, BAD_REQUEST if exc.status_code < 500 else INTERNAL_SERVER_ERROR)
    body = {"code": code, "message": str(exc.detail), "reason": None}
    return _error_response(exc.status_code, body, getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    issues = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query"))
        issues.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    body = {"code": BAD_REQUEST, "message": "; ".join(issues) or "Invalid input", "reason": None}
    return _error_response(status.HTTP_400_BAD_REQUEST, body)


async def rate_limit_error_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    body = {"code": TOO_MANY_REQUESTS, "message": f"Rate limit exceeded: {exc.detail}", "reason": None}
    return _error_response(status.HTTP_429_TOO_MANY_REQUESTS, body)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, error=str(exc))
    body = {"code": INTERNAL_SERVER_ERROR, "message": "Internal server error", "reason": None}
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, body)

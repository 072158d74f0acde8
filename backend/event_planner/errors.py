"""Error hierarchy and the FastAPI handlers that render it.

Every failure leaves the API as ``{"error": "<message>"}``:
    - EventPlannerError subclasses carry their own HTTP status
    - RequestValidationError (malformed body / path) -> 400
    - HTTPException raised by FastAPI itself -> its own status
    - anything else -> 500, logged with traceback, no internals leaked
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class EventPlannerError(Exception):
    """Base exception for all domain errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": self.message}


class ValidationError(EventPlannerError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(EventPlannerError):
    """Missing, invalid or expired credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(AuthError):
    """Authenticated, but not allowed to touch the target resource."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(EventPlannerError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(EventPlannerError):
    """Uniqueness or state-transition violation."""

    status_code = status.HTTP_409_CONFLICT


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(EventPlannerError)
    async def domain_error_handler(request: Request, exc: EventPlannerError):
        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        else:
            logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_response(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _first_validation_message(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        detail = exc.detail if isinstance(exc.detail, str) else "request failed"
        return JSONResponse(status_code=exc.status_code, content={"error": detail})

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "internal server error"},
        )


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request body"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query", "header")]
    if first.get("type") == "json_invalid" or not loc:
        return "invalid request body"
    return f"invalid {'.'.join(loc)}: {first.get('msg', 'invalid value')}"

"""
Error taxonomy shared by services and the HTTP layer.

Services raise HelpingHandError subclasses; the handlers below turn them
(and framework errors) into ``{"message": ...}`` JSON responses.
"""
import logging
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class HelpingHandError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(HelpingHandError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(HelpingHandError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class ForbiddenError(HelpingHandError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not enough permissions"


class NotFoundError(HelpingHandError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(HelpingHandError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "N/A")


async def helping_hand_exception_handler(request: Request, exc: HelpingHandError):
    logger.info(
        f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}",
        extra={"request_id": _request_id(request)}
    )
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        if location:
            messages.append(f"{location}: {error.get('msg')}")
        else:
            messages.append(str(error.get("msg")))
    return "; ".join(messages) or "Invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": _describe_validation_errors(exc)},
    )


async def general_exception_handler(request: Request, exc: Exception):
    # Never leak the raw exception text to clients
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
        extra={"request_id": _request_id(request)}
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": HelpingHandError.default_message},
    )

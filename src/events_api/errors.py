"""
Exception types raised by the store adapter and the FastAPI handlers that
turn them into responses.

Every failure a client can trigger, whether a body that does not decode or a
DynamoDB call that fails, is answered the same way:

    HTTP 500  {"message": "<underlying error text>"}
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError


class EventStoreError(Exception):
    """A DynamoDB operation failed (connectivity, timeout, throttling, ...)"""


class EventNotFoundError(EventStoreError):
    """No item matched the ID filter"""

    def __init__(self, message: str = "no documents in result"):
        super().__init__(message)


def format_validation_error(exc) -> str:
    """Flatten pydantic/FastAPI decode errors into one line of text."""
    parts = []
    for error in exc.errors():
        message = error.get("msg", "invalid request body")
        detail = (error.get("ctx") or {}).get("error")
        if detail and str(detail) not in message:
            message = f"{message}: {detail}"
        field = ".".join(
            loc for loc in error.get("loc", ()) if isinstance(loc, str) and loc != "body"
        )
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts) or "invalid request body"


def register_error_handlers(app: FastAPI) -> None:
    """Register the store and decode error handlers on the app."""

    @app.exception_handler(EventStoreError)
    async def event_store_error_handler(request: Request, exc: EventStoreError):
        print(f"Store error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": str(exc)},
        )

    @app.exception_handler(ValidationError)
    @app.exception_handler(RequestValidationError)
    async def decode_error_handler(request: Request, exc):
        message = format_validation_error(exc)
        print(f"Decode error on {request.method} {request.url.path}: {message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": message},
        )

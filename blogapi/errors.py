"""
Error taxonomy and the FastAPI handlers that render it.

Every error leaves the service as ``{"error": "<message>"}``.  Expected
client mistakes are raised as ``ApiError`` subclasses at the handler
boundary; anything unexpected is logged and collapsed into a generic 500
by ``unexpected_errors`` so no internal detail reaches the caller.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequest(ApiError):
    status_code = 400


class Unauthorized(ApiError):
    status_code = 401


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    status_code = 409


class InternalError(ApiError):
    status_code = 500

    def __init__(self, message: str = UNEXPECTED_ERROR_MESSAGE) -> None:
        super().__init__(message)


class InsertFailure(Exception):
    """The store reported something other than exactly one inserted row."""


@contextmanager
def unexpected_errors(operation: str) -> Iterator[None]:
    """
    Log any non-``ApiError`` exception raised inside the block and re-raise
    it as ``InternalError``.  ``ApiError`` passes through untouched.
    """
    try:
        yield
    except ApiError:
        raise
    except Exception:
        logger.exception("Unexpected failure during %s", operation)
        raise InternalError() from None


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = _error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Request validation failed: %s", exc.errors())
    return _error_response(400, "The request is malformed")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

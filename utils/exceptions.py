import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class MenuEngineError(Exception):
    """Base class for errors raised by the availability engine."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FormatError(MenuEngineError):
    """A date or time string is malformed."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class ConfigurationError(MenuEngineError):
    """Unknown role token or missing/invalid branch context."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(MenuEngineError):
    """A referenced item, seasonal menu or order does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class PermissionDeniedError(MenuEngineError):
    """The role lacks the capability required by a mutation."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidTransitionError(MenuEngineError):
    """An order status change that the lifecycle does not allow."""

    status_code = status.HTTP_409_CONFLICT


class RaceConditionAnomaly(MenuEngineError):
    """
    Lost update between concurrent stock writers on the same key.

    Never raised: stock writes are last-write-wins. The class names the
    anomaly so callers and tests can refer to it.
    """

    status_code = status.HTTP_409_CONFLICT


async def menu_engine_exception_handler(request: Request, exc: MenuEngineError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(MenuEngineError, menu_engine_exception_handler)

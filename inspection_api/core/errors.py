"""
Typed failures raised by the data-access services.

Routes never catch these one by one; ``register_exception_handlers``
turns them into JSON responses with a matching status code.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from inspection_api.core.logger import get_logger

logger = get_logger(__name__)


class DataAccessError(Exception):
    status_code = 500

    def __init__(self, message: str = "Data access failed"):
        super().__init__(message)
        self.message = message


class NotFoundError(DataAccessError):
    status_code = 404


class PermissionDeniedError(DataAccessError):
    status_code = 403


class AuthenticationError(DataAccessError):
    status_code = 401


class ConflictError(DataAccessError):
    status_code = 409


async def data_access_error_handler(request: Request, exc: DataAccessError):
    logger.warning(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DataAccessError, data_access_error_handler)

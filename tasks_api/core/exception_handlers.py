"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and store
exceptions to HTTP responses by error code.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tasks_api.core.config import get_settings
from tasks_api.domain.exceptions import TasksApiException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "RESOURCE_NOT_FOUND": 404,
    "STORE_ERROR": 500,
}


def _tasks_api_exception_handler(
    request: Request, exc: TasksApiException
) -> JSONResponse:
    """Return JSON from TasksApiException.to_dict() with appropriate status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status,
        content=exc.to_dict(),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the exception handlers on the FastAPI app.

    Request bodies are parsed by dependencies that raise ValidationException,
    so every client error arrives as a TasksApiException. Anything else is
    an unhandled 500.
    """
    app.add_exception_handler(TasksApiException, _tasks_api_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)

"""Pydantic request/response schemas for the API."""

from tasks_api.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from tasks_api.schemas.task import (
    TaskCreateRequest,
    TaskDeletedResponse,
    TaskResponse,
    TaskUpdateRequest,
)

__all__ = [
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "TaskCreateRequest",
    "TaskDeletedResponse",
    "TaskResponse",
    "TaskUpdateRequest",
]

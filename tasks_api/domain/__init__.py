"""Domain layer: entities and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from tasks_api.domain.entities import TaskEntity
from tasks_api.domain.exceptions import (
    ResourceNotFoundException,
    TasksApiException,
    ValidationException,
)

__all__ = [
    "ResourceNotFoundException",
    "TaskEntity",
    "TasksApiException",
    "ValidationException",
]

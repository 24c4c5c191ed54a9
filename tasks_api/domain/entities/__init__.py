"""Domain entities.

Pure domain models; no persistence concerns.
"""

from tasks_api.domain.entities.task import TaskEntity, ensure_action

__all__ = [
    "TaskEntity",
    "ensure_action",
]

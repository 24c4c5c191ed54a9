"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from typing import Any, Protocol

from tasks_api.domain.entities import TaskEntity


class ITaskRepository(Protocol):
    """Protocol for the task store adapter (DIP).

    Every method raises ResourceNotFoundException for an unknown id,
    ValidationException when action would be missing or empty, and
    StoreException when the document store fails.
    """

    async def create(self, action: Any) -> TaskEntity:
        """Persist a new task and return it with its generated id."""

    async def list_all(self) -> list[TaskEntity]:
        """Return every task in insertion order."""

    async def get(self, task_id: str) -> TaskEntity:
        """Return the task with the given id."""

    async def update(self, task_id: str, fields: dict[str, Any]) -> TaskEntity:
        """Overwrite the supplied fields and return the updated task."""

    async def delete(self, task_id: str) -> TaskEntity:
        """Remove the task and return what was removed."""

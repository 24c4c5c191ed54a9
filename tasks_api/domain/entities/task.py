"""Task domain entity.

A task is the single persisted record: a store-generated id plus a
required, non-empty action text.
"""

from dataclasses import dataclass
from typing import Any

from tasks_api.domain.exceptions import ValidationException

ACTION_REQUIRED_MESSAGE = "The task text field is required"


def ensure_action(value: Any) -> str:
    """Return value if it is a non-empty string; raise ValidationException otherwise."""
    if value is None or value == "":
        raise ValidationException(ACTION_REQUIRED_MESSAGE, field="action")
    if not isinstance(value, str):
        raise ValidationException("The task text field must be a string", field="action")
    return value


@dataclass(frozen=True)
class TaskEntity:
    """Domain entity for a task."""

    id: str
    action: str

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> "TaskEntity":
        """Build from a stored document (id + fields)."""
        return cls(id=doc_id, action=data.get("action", ""))

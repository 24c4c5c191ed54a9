"""Task API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tasks_api.domain.entities import ensure_action


class TaskCreateRequest(BaseModel):
    """Request body for creating a task.

    A supplied action must be a non-empty string. An absent action is left
    as None so the store adapter reports it as a 400 validation error.
    """

    model_config = ConfigDict(extra="ignore")

    action: str | None = None

    @field_validator("action", mode="before")
    @classmethod
    def _check_action(cls, value: Any) -> str:
        return ensure_action(value)


class TaskUpdateRequest(BaseModel):
    """Request body for updating a task (partial; only supplied fields change)."""

    model_config = ConfigDict(extra="ignore")

    action: str | None = None

    @field_validator("action", mode="before")
    @classmethod
    def _check_action(cls, value: Any) -> str:
        return ensure_action(value)

    def supplied_fields(self) -> dict[str, Any]:
        """Fields present in the request body."""
        return self.model_dump(include=self.model_fields_set)


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Store-generated task id")
    action: str


class TaskDeletedResponse(BaseModel):
    """Response for DELETE /tasks/{task_id}."""

    id: str
    deleted: bool = True

"""Task API: thin routes delegating to the task repository.

Errors raised by the repository (validation, not found, store) are mapped
to HTTP responses by the registered exception handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from tasks_api.api.v1.dependencies import (
    get_task_create_body,
    get_task_repo,
    get_task_update_body,
)
from tasks_api.application.interfaces import ITaskRepository
from tasks_api.schemas.task import (
    TaskCreateRequest,
    TaskDeletedResponse,
    TaskResponse,
    TaskUpdateRequest,
)

router = APIRouter()


@router.api_route("", methods=["GET", "HEAD"], response_model=list[TaskResponse])
async def list_tasks(
    repo: Annotated[ITaskRepository, Depends(get_task_repo)],
):
    """List all tasks in insertion order."""
    tasks = await repo.list_all()
    return [TaskResponse.model_validate(t) for t in tasks]


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    body: Annotated[TaskCreateRequest, Depends(get_task_create_body)],
    repo: Annotated[ITaskRepository, Depends(get_task_repo)],
):
    """Create a task; action is required."""
    task = await repo.create(body.action)
    return TaskResponse.model_validate(task)


@router.api_route("/{task_id}", methods=["GET", "HEAD"], response_model=TaskResponse)
async def get_task(
    task_id: str,
    repo: Annotated[ITaskRepository, Depends(get_task_repo)],
):
    """Get task by id."""
    task = await repo.get(task_id)
    return TaskResponse.model_validate(task)


@router.api_route("/{task_id}", methods=["PUT", "PATCH"], response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: Annotated[TaskUpdateRequest, Depends(get_task_update_body)],
    repo: Annotated[ITaskRepository, Depends(get_task_repo)],
):
    """Update the supplied fields of a task."""
    task = await repo.update(task_id, body.supplied_fields())
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", response_model=TaskDeletedResponse)
async def delete_task(
    task_id: str,
    repo: Annotated[ITaskRepository, Depends(get_task_repo)],
):
    """Delete a task."""
    task = await repo.delete(task_id)
    return TaskDeletedResponse(id=task.id)

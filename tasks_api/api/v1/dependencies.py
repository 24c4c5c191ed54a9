"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the database handle, the task repository
and parsed request bodies. Routes depend only on these dependencies, not
on infrastructure directly.
"""

from __future__ import annotations

import json
from typing import Annotated, Any

from fastapi import Depends, Request

from tasks_api.core.config import get_settings
from tasks_api.domain.exceptions import ValidationException
from tasks_api.infrastructure.exceptions import StoreNotConnectedException
from tasks_api.infrastructure.firebase.client import FirestoreConnection
from tasks_api.infrastructure.firebase.repositories import FirestoreTaskRepository
from tasks_api.schemas.task import TaskCreateRequest, TaskUpdateRequest

_JSON = "application/json"
_FORM = "application/x-www-form-urlencoded"


def get_db_connection(request: Request) -> FirestoreConnection:
    """Database handle created by the lifespan and stored on app.state."""
    connection = getattr(request.app.state, "db", None)
    if connection is None:
        raise StoreNotConnectedException("request")
    return connection


def get_task_repo(
    connection: Annotated[FirestoreConnection, Depends(get_db_connection)],
) -> FirestoreTaskRepository:
    """Task repository bound to the shared connection."""
    return FirestoreTaskRepository(connection, get_settings().tasks_collection)


async def parse_body(request: Request) -> dict[str, Any]:
    """Parse a JSON or URL-encoded request body into a dict.

    An empty body, or one with any other content type, parses to {}.
    """
    if not await request.body():
        return {}
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == _JSON or content_type.endswith("+json"):
        try:
            payload = await request.json()
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValidationException(f"Malformed JSON body: {e}") from e
        if not isinstance(payload, dict):
            raise ValidationException("Request body must be a JSON object")
        return payload
    if content_type == _FORM:
        form = await request.form()
        return dict(form.items())
    return {}


def get_task_create_body(
    payload: Annotated[dict[str, Any], Depends(parse_body)],
) -> TaskCreateRequest:
    return TaskCreateRequest.model_validate(payload)


def get_task_update_body(
    payload: Annotated[dict[str, Any], Depends(parse_body)],
) -> TaskUpdateRequest:
    return TaskUpdateRequest.model_validate(payload)

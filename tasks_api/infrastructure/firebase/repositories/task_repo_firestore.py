"""Firestore-backed task repository (implements ITaskRepository)."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from tasks_api.core.config import get_settings
from tasks_api.domain.entities import TaskEntity, ensure_action
from tasks_api.domain.exceptions import ResourceNotFoundException
from tasks_api.infrastructure.exceptions import StoreException
from tasks_api.infrastructure.firebase._rest_client import (
    CollectionReference,
    DocumentSnapshot,
    FirestoreRequestError,
)
from tasks_api.infrastructure.firebase.client import FirestoreConnection

# Fields a client may overwrite on update; anything else in the payload is ignored.
UPDATABLE_FIELDS = ("action",)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate Firestore client failures into StoreException."""
    try:
        yield
    except FirestoreRequestError as e:
        raise StoreException(operation, str(e)) from e


def _insertion_key(snapshot: DocumentSnapshot) -> tuple[datetime, str]:
    return (snapshot.create_time or _EPOCH, snapshot.id)


class FirestoreTaskRepository:
    """Task repository using one Firestore collection.

    Documents hold exactly {"action": ...}; the Firestore auto-ID is the task id
    and the document createTime gives insertion order.
    """

    def __init__(
        self, connection: FirestoreConnection, collection: str | None = None
    ) -> None:
        self._connection = connection
        self._collection = collection or get_settings().tasks_collection

    def _coll(self, operation: str) -> CollectionReference:
        return self._connection.require_client(operation).collection(self._collection)

    async def create(self, action: Any) -> TaskEntity:
        """Validate action, then insert; the store generates the id."""
        action = ensure_action(action)
        coll = self._coll("create")
        with _store_errors("create"):
            snapshot = await coll.add({"action": action})
        return TaskEntity.from_document(snapshot.id, snapshot.to_dict())

    async def list_all(self) -> list[TaskEntity]:
        """Return every task, oldest first."""
        coll = self._coll("list")
        snapshots: list[DocumentSnapshot] = []
        with _store_errors("list"):
            async for snapshot in coll.stream():
                snapshots.append(snapshot)
        snapshots.sort(key=_insertion_key)
        return [TaskEntity.from_document(s.id, s.to_dict()) for s in snapshots]

    async def get(self, task_id: str) -> TaskEntity:
        """Return task by id; raise ResourceNotFoundException if absent."""
        coll = self._coll("read")
        with _store_errors("read"):
            snapshot = await coll.document(task_id).get()
        if snapshot is None:
            raise ResourceNotFoundException("task", task_id)
        return TaskEntity.from_document(snapshot.id, snapshot.to_dict())

    async def update(self, task_id: str, fields: dict[str, Any]) -> TaskEntity:
        """Overwrite the supplied fields (last write wins).

        An empty action is rejected before anything is written. With nothing
        to update the current task is returned unchanged.
        """
        updates = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
        if "action" in updates:
            updates["action"] = ensure_action(updates["action"])
        if not updates:
            return await self.get(task_id)
        coll = self._coll("update")
        with _store_errors("update"):
            snapshot = await coll.document(task_id).update(updates)
        if snapshot is None:
            raise ResourceNotFoundException("task", task_id)
        return TaskEntity.from_document(snapshot.id, snapshot.to_dict())

    async def delete(self, task_id: str) -> TaskEntity:
        """Remove the task and return it; raise ResourceNotFoundException if absent."""
        coll = self._coll("delete")
        with _store_errors("delete"):
            doc_ref = coll.document(task_id)
            snapshot = await doc_ref.get()
            deleted = snapshot is not None and await doc_ref.delete(must_exist=True)
        if not deleted:
            raise ResourceNotFoundException("task", task_id)
        return TaskEntity.from_document(snapshot.id, snapshot.to_dict())

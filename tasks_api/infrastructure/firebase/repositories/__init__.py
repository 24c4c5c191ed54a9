"""Firestore-backed repository implementations."""

from tasks_api.infrastructure.firebase.repositories.task_repo_firestore import (
    FirestoreTaskRepository,
)

__all__ = [
    "FirestoreTaskRepository",
]

"""Firestore integration (REST API + google-auth)."""

from tasks_api.infrastructure.firebase._rest_client import (
    FirestoreRequestError,
    FirestoreRESTClient,
)
from tasks_api.infrastructure.firebase.client import FirestoreConnection

__all__ = [
    "FirestoreConnection",
    "FirestoreRESTClient",
    "FirestoreRequestError",
]

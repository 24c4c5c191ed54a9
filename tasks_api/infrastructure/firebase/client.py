"""Firestore connection handle (REST-based, no firebase-admin).

One FirestoreConnection is created at app startup and shared by every
request through app.state. The credential comes from either
FIREBASE_SERVICE_ACCOUNT_KEY (JSON string) or FIREBASE_SERVICE_ACCOUNT_PATH
(file path). Connecting never raises: failures are logged and the handle
stays disconnected, so store calls fail with StoreNotConnectedException.
"""

import json
import logging
from pathlib import Path

from tasks_api.core.config import Settings, get_settings
from tasks_api.infrastructure.exceptions import StoreNotConnectedException
from tasks_api.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)


def _load_key_dict(settings: Settings) -> dict | None:
    """Return service account dict from env key or file path."""
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            raise ValueError(
                f"FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: {path} (resolved: {resolved})"
            )
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


class FirestoreConnection:
    """Process-wide Firestore handle, connected once at startup."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: FirestoreRESTClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> bool:
        """Build credentials, fetch a first access token and keep the client.

        Returns:
            True if connected, False if the credential is missing or invalid.
        """
        if self._client is not None:
            return True
        client: FirestoreRESTClient | None = None
        try:
            key_dict = _load_key_dict(self._settings)
            if not key_dict:
                logger.error(
                    "Database connection failed: set FIREBASE_SERVICE_ACCOUNT_KEY "
                    "or FIREBASE_SERVICE_ACCOUNT_PATH"
                )
                return False
            project_id = key_dict.get("project_id")
            if not project_id:
                logger.error("Database connection failed: service account JSON missing 'project_id'")
                return False
            client = FirestoreRESTClient(project_id, _get_credentials(key_dict))
            await client.get_token()
        except Exception:
            logger.exception("Database connection failed")
            if client is not None:
                await client.aclose()
            return False
        self._client = client
        logger.info("Database connected successfully (project %s)", client.project_id)
        return True

    def require_client(self, operation: str) -> FirestoreRESTClient:
        """Return the client or raise StoreNotConnectedException."""
        if self._client is None:
            raise StoreNotConnectedException(operation)
        return self._client

    async def close(self) -> None:
        """Close the client's HTTP connection pool. Call from app shutdown."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Firestore HTTP client closed")

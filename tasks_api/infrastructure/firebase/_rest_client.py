"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Every transport, HTTP status or credential failure surfaces as
FirestoreRequestError; a 404 is reported as "no document" (None / False).
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from datetime import datetime
from typing import Any
from urllib.parse import quote

import httpx
from google.auth.exceptions import GoogleAuthError

from tasks_api.infrastructure.firebase._rest_encoding import (
    decode_fields,
    document_id_from_name,
    encode_fields,
    parse_timestamp,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"
_LIST_PAGE_SIZE = 300
# httpx collapses dot segments, which would turn a document URL into the collection URL.
_INVALID_DOCUMENT_IDS = frozenset({"", ".", ".."})


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    if not credentials.valid:
        from google.auth.transport.requests import Request

        credentials.refresh(Request())
    return credentials.token


class FirestoreRequestError(Exception):
    """A Firestore call failed (transport, non-2xx status other than 404, or auth)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


def _error_message(resp: httpx.Response) -> str:
    """Firestore error bodies look like {"error": {"code", "message", "status"}}."""
    try:
        err = resp.json().get("error", {})
    except ValueError:
        return f"HTTP {resp.status_code}"
    status = err.get("status") or f"HTTP {resp.status_code}"
    message = err.get("message")
    return f"{status}: {message}" if message else status


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    params: list[tuple[str, str]] | None = None,
) -> dict | None:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    try:
        resp = await client.request(
            method, url, headers=headers, json=body, params=params
        )
    except httpx.HTTPError as e:
        raise FirestoreRequestError(f"{type(e).__name__}: {e}") from e
    if resp.status_code == 404:
        return None
    if resp.status_code not in (200, 204):
        raise FirestoreRequestError(_error_message(resp), resp.status_code)
    if not resp.content:
        return {}
    return resp.json()


class DocumentSnapshot:
    """Snapshot of a document (id + data + server timestamps)."""

    def __init__(
        self,
        id_: str,
        data: dict,
        create_time: datetime | None = None,
        update_time: datetime | None = None,
    ):
        self.id = id_
        self._data = data
        self.create_time = create_time
        self.update_time = update_time

    @classmethod
    def from_rest(cls, doc: dict) -> "DocumentSnapshot":
        """Build from a REST Document resource; a body without a name is not a document."""
        if not doc.get("name"):
            raise FirestoreRequestError("Response is not a document resource")
        create_time = doc.get("createTime")
        update_time = doc.get("updateTime")
        return cls(
            document_id_from_name(doc.get("name", "")),
            decode_fields(doc.get("fields")),
            parse_timestamp(create_time) if create_time else None,
            parse_timestamp(update_time) if update_time else None,
        )

    def to_dict(self) -> dict:
        return self._data


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    @property
    def _url(self) -> str:
        return f"{self._client.base_url}/{self._path}"

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http, self._url, access_token=await self._client.get_token()
        )
        if out is None:
            return None
        return DocumentSnapshot.from_rest(out)

    async def update(self, data: dict[str, Any]) -> DocumentSnapshot | None:
        """Overwrite only the given fields of an existing document.

        Uses an update mask plus an "exists" precondition, so a missing
        document is never recreated. Returns the full updated document,
        or None if the document does not exist.
        """
        params = [("updateMask.fieldPaths", field) for field in data]
        params.append(("currentDocument.exists", "true"))
        out = await _request_async(
            self._client._http,
            self._url,
            method="PATCH",
            body={"fields": encode_fields(data)},
            access_token=await self._client.get_token(),
            params=params,
        )
        if out is None:
            return None
        return DocumentSnapshot.from_rest(out)

    async def delete(self, *, must_exist: bool = False) -> bool:
        """Delete the document.

        Without must_exist the call is idempotent. With must_exist a missing
        document returns False instead of silently succeeding.
        """
        params = [("currentDocument.exists", "true")] if must_exist else None
        out = await _request_async(
            self._client._http,
            self._url,
            method="DELETE",
            access_token=await self._client.get_token(),
            params=params,
        )
        return out is not None


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    @property
    def _url(self) -> str:
        return f"{self._client.base_url}/{self._path}"

    def document(self, document_id: str) -> DocumentReference:
        """Reference a document by id.

        Ids that would not stay a single path segment ("", ".", "..", or
        containing "/") raise FirestoreRequestError before any request is made.
        """
        if document_id in _INVALID_DOCUMENT_IDS or "/" in document_id:
            raise FirestoreRequestError(f"Invalid document id: {document_id!r}", 400)
        return DocumentReference(
            self._client, f"{self._path}/{quote(document_id, safe='')}"
        )

    async def add(self, data: dict[str, Any]) -> DocumentSnapshot:
        """Create a document with a store-generated ID and return it."""
        out = await _request_async(
            self._client._http,
            self._url,
            method="POST",
            body={"fields": encode_fields(data)},
            access_token=await self._client.get_token(),
        )
        if not out:
            raise FirestoreRequestError("createDocument returned no document")
        return DocumentSnapshot.from_rest(out)

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List every document in the collection, following page tokens."""
        page_token: str | None = None
        while True:
            params = [("pageSize", str(_LIST_PAGE_SIZE))]
            if page_token:
                params.append(("pageToken", page_token))
            out = await _request_async(
                self._client._http,
                self._url,
                access_token=await self._client.get_token(),
                params=params,
            )
            if not out:
                return
            for doc in out.get("documents", []):
                yield DocumentSnapshot.from_rest(doc)
            page_token = out.get("nextPageToken")
            if not page_token:
                return


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = FIRESTORE_BASE_URL,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self.base_url = base_url.rstrip("/")
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        try:
            return await asyncio.to_thread(_get_access_token, self._credentials)
        except GoogleAuthError as e:
            raise FirestoreRequestError(f"Credential refresh failed: {e}") from e

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

"""In-memory Firestore REST v1 backend for httpx.MockTransport.

Implements the handful of calls FirestoreRESTClient makes (createDocument
with auto-ID, get, list with page tokens, patch with updateMask and
currentDocument.exists, delete) closely enough to run the real client.
"""

from __future__ import annotations

import itertools
import json
import re
from datetime import datetime, timedelta, timezone

import httpx

TEST_TOKEN = "test-token"

_RESERVED_ID = re.compile(r"^__.*__$")
_T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeCredentials:
    """Always-valid google-auth style credentials (no refresh, no network)."""

    valid = True
    token = TEST_TOKEN


def _error(status: int, grpc_status: str, message: str) -> httpx.Response:
    return httpx.Response(
        status, json={"error": {"code": status, "message": message, "status": grpc_status}}
    )


class FakeFirestore:
    """Fake Firestore server; pass .handler to httpx.MockTransport."""

    def __init__(self, project_id: str = "test-project", page_size_cap: int = 2) -> None:
        self.project_id = project_id
        self.page_size_cap = page_size_cap
        self.prefix = f"/v1/projects/{project_id}/databases/(default)/documents"
        self.collections: dict[str, dict[str, dict]] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None
        self.raise_error: Exception | None = None
        self._ticks = itertools.count(1)
        self._ids = itertools.count(1)

    # ---- helpers for tests ----

    def documents(self, collection: str = "tasks") -> dict[str, dict]:
        """Stored documents as {id: decoded string fields}."""
        out = {}
        for doc_id, doc in self.collections.get(collection, {}).items():
            out[doc_id] = {k: v.get("stringValue") for k, v in doc.get("fields", {}).items()}
        return out

    # ---- transport ----

    def _now(self) -> str:
        # Nanosecond precision, like the real service.
        t = _T0 + timedelta(microseconds=next(self._ticks))
        return t.strftime("%Y-%m-%dT%H:%M:%S.%f") + "123Z"

    def _new_id(self) -> str:
        # Descending ids: listing by id alone would reverse insertion order.
        return f"auto{1_000_000 - next(self._ids)}"

    def _name(self, collection: str, doc_id: str) -> str:
        return f"{self.prefix[len('/v1/'):]}/{collection}/{doc_id}"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        if self.fail_with is not None:
            return _error(self.fail_with, "UNAVAILABLE", "The service is currently unavailable.")
        if request.headers.get("Authorization") != f"Bearer {TEST_TOKEN}":
            return _error(401, "UNAUTHENTICATED", "Missing or invalid credentials.")
        path = request.url.path
        if not path.startswith(self.prefix + "/"):
            return _error(404, "NOT_FOUND", "Unknown path.")
        parts = path[len(self.prefix) + 1:].split("/")
        if len(parts) == 1:
            return self._collection_call(request, parts[0])
        if len(parts) == 2:
            return self._document_call(request, parts[0], parts[1])
        return _error(400, "INVALID_ARGUMENT", "Unsupported path depth.")

    def _collection_call(self, request: httpx.Request, collection: str) -> httpx.Response:
        docs = self.collections.setdefault(collection, {})
        if request.method == "POST":
            body = json.loads(request.content)
            doc_id = self._new_id()
            now = self._now()
            doc = {
                "name": self._name(collection, doc_id),
                "fields": body.get("fields", {}),
                "createTime": now,
                "updateTime": now,
            }
            docs[doc_id] = doc
            return httpx.Response(200, json=doc)
        if request.method == "GET":
            page_size = min(
                int(request.url.params.get("pageSize", self.page_size_cap)),
                self.page_size_cap,
            )
            start = int(request.url.params.get("pageToken", "0"))
            ordered = [docs[k] for k in sorted(docs)]
            page = ordered[start:start + page_size]
            out: dict = {}
            if page:
                out["documents"] = page
            if start + page_size < len(ordered):
                out["nextPageToken"] = str(start + page_size)
            return httpx.Response(200, json=out)
        return _error(400, "INVALID_ARGUMENT", "Unsupported method.")

    def _document_call(
        self, request: httpx.Request, collection: str, doc_id: str
    ) -> httpx.Response:
        if _RESERVED_ID.match(doc_id):
            return _error(400, "INVALID_ARGUMENT", f"Document id \"{doc_id}\" is reserved.")
        docs = self.collections.setdefault(collection, {})
        doc = docs.get(doc_id)
        must_exist = request.url.params.get("currentDocument.exists") == "true"
        if request.method == "GET":
            if doc is None:
                return _error(404, "NOT_FOUND", "Document not found.")
            return httpx.Response(200, json=doc)
        if request.method == "PATCH":
            if doc is None and must_exist:
                return _error(404, "NOT_FOUND", "No document to update.")
            body = json.loads(request.content)
            now = self._now()
            if doc is None:
                doc = {"name": self._name(collection, doc_id), "fields": {}, "createTime": now}
                docs[doc_id] = doc
            for field in request.url.params.get_list("updateMask.fieldPaths"):
                if field in body.get("fields", {}):
                    doc["fields"][field] = body["fields"][field]
                else:
                    doc["fields"].pop(field, None)
            doc["updateTime"] = now
            return httpx.Response(200, json=doc)
        if request.method == "DELETE":
            if doc is None and must_exist:
                return _error(404, "NOT_FOUND", "No document to delete.")
            docs.pop(doc_id, None)
            return httpx.Response(200, json={})
        return _error(400, "INVALID_ARGUMENT", "Unsupported method.")

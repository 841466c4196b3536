"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
Keeps the deployment bundle small (avoids grpcio / firebase-admin).
All HTTP calls use httpx.AsyncClient so they do not block the event loop.

Multi-document writes go through WriteBatch, which commits with the
``documents:commit`` endpoint: every write in the batch lands or none do.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any

import httpx

from cowconnect.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_document,
    encode_document,
    split_transforms,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
) -> dict | list | None:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method == "GET":
        resp = await client.get(url, headers=headers)
    elif method == "PATCH":
        resp = await client.patch(url, headers=headers, json=body)
    elif method == "POST":
        resp = await client.post(url, headers=headers, json=body)
    elif method == "DELETE":
        resp = await client.delete(url, headers=headers)
    else:
        raise ValueError(f"Unsupported method: {method!r}")
    if resp.status_code == 404:
        return None
    if resp.status_code not in (200, 204):
        resp.raise_for_status()
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class CommitPreconditionError(Exception):
    """Raised when a batch commit is rejected because a precondition failed."""


def _doc_id(name: str) -> str:
    return name.split("/")[-1] if name else ""


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return _doc_id(self._path)

    @property
    def path(self) -> str:
        """Full resource name (projects/.../documents/<collection>/<id>)."""
        return self._path

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            access_token=await self._client.get_token(),
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out.get("fields")))


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class WriteBatch:
    """Atomic multi-document write; matches firestore API style.

    Values may be ArrayUnion/ArrayRemove sentinels, which become field
    transforms with set semantics. update() and delete() carry an
    ``exists: true`` precondition, create() an ``exists: false`` one, so a
    missing (or already existing) target aborts the whole commit.
    """

    def __init__(self, client: "FirestoreRESTClient") -> None:
        self._client = client
        self._writes: list[dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._writes)

    @property
    def writes(self) -> list[dict[str, Any]]:
        return list(self._writes)

    def create(self, ref: DocumentReference, data: dict[str, Any]) -> "WriteBatch":
        plain, transforms = split_transforms(data)
        write: dict[str, Any] = {
            "update": {"name": ref.path, **encode_document(plain)},
            "currentDocument": {"exists": False},
        }
        if transforms:
            write["updateTransforms"] = transforms
        self._writes.append(write)
        return self

    def update(self, ref: DocumentReference, data: dict[str, Any]) -> "WriteBatch":
        plain, transforms = split_transforms(data)
        write: dict[str, Any] = {
            "update": {"name": ref.path, **encode_document(plain)},
            "updateMask": {"fieldPaths": list(plain)},
            "currentDocument": {"exists": True},
        }
        if transforms:
            write["updateTransforms"] = transforms
        self._writes.append(write)
        return self

    def delete(self, ref: DocumentReference) -> "WriteBatch":
        self._writes.append({"delete": ref.path, "currentDocument": {"exists": True}})
        return self

    async def commit(self) -> dict:
        """Commit all writes atomically.

        Raises:
            CommitPreconditionError: A precondition failed; nothing was written.
            httpx.HTTPError: Transport failure or any other error status.
        """
        if not self._writes:
            return {}
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._client.documents_path}:commit",
            method="POST",
            body={"writes": self._writes},
            access_token=await self._client.get_token(),
        )
        if out is None:
            # Firestore answers 404 when an exists:true precondition fails.
            raise CommitPreconditionError("A document in the batch no longer exists")
        return out


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
    "array_contains": "ARRAY_CONTAINS",
    "array-contains": "ARRAY_CONTAINS",
    "array_contains_any": "ARRAY_CONTAINS_ANY",
    "array-contains-any": "ARRAY_CONTAINS_ANY",
}

DESCENDING = "DESCENDING"
ASCENDING = "ASCENDING"


class _Query:
    """Fluent query builder for collection; runs via runQuery (filter/order/limit on server)."""

    def __init__(
        self,
        client: "FirestoreRESTClient",
        parent: str,
        collection_id: str,
    ):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[tuple[str, str, Any]] = []
        self._order_by_field: str | None = None
        self._order_direction: str = ASCENDING
        self._limit: int = 100

    def where(self, field: str, op: str, value: Any) -> "_Query":
        """Add a filter; several filters are combined with AND."""
        self._filters.append((field, _OP_MAP.get(op, op), value))
        return self

    def order_by(self, field: str, direction: str = ASCENDING) -> "_Query":
        self._order_by_field = field
        self._order_direction = direction
        return self

    def limit(self, n: int) -> "_Query":
        self._limit = n
        return self

    def _where_clause(self) -> dict[str, Any] | None:
        filters = [
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": op,
                    "value": _encode_value(value),
                }
            }
            for field, op, value in self._filters
        ]
        if not filters:
            return None
        if len(filters) == 1:
            return filters[0]
        return {"compositeFilter": {"op": "AND", "filters": filters}}

    def to_structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        where = self._where_clause()
        if where is not None:
            structured["where"] = where
        if self._order_by_field is not None:
            structured["orderBy"] = [
                {
                    "field": {"fieldPath": self._order_by_field},
                    "direction": self._order_direction,
                }
            ]
        if self._limit:
            structured["limit"] = self._limit
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        resp = await _request_async(
            self._client._http,
            f"{_BASE}/{self._parent}:runQuery",
            method="POST",
            body={"structuredQuery": self.to_structured_query()},
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            doc = item["document"]
            yield DocumentSnapshot(
                _doc_id(doc.get("name", "")), decode_document(doc.get("fields"))
            )


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    def _query(self) -> _Query:
        parent = self._path.rsplit("/", 1)[0]
        collection_id = self._path.split("/")[-1]
        return _Query(self._client, parent, collection_id)

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Chain .where(), .order_by(), .limit(), then .stream()."""
        return self._query().where(field, op, value)

    def order_by(self, field: str, direction: str = ASCENDING) -> _Query:
        return self._query().order_by(field, direction)

    def limit(self, n: int) -> _Query:
        return self._query().limit(n)


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def documents_path(self) -> str:
        return self._prefix

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

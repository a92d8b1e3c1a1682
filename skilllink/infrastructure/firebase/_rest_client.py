"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Conditional writes use Firestore preconditions (``currentDocument``), which
is what the repositories build compare-and-set on.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Iterable
from typing import Any

import httpx

from skilllink.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_fields,
    encode_document,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"


class DocumentExistsError(Exception):
    """Raised when a create or an ``exists: false`` precondition finds the document (409)."""


class DocumentPreconditionError(Exception):
    """Raised when a ``currentDocument`` precondition fails (FAILED_PRECONDITION / 412)."""


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


def _error_status(resp: httpx.Response) -> str | None:
    """Return the google.rpc status name from an error body (e.g. 'FAILED_PRECONDITION')."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, list) and body:
        body = body[0]
    if isinstance(body, dict):
        return (body.get("error") or {}).get("status")
    return None


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    params: list[tuple[str, str]] | None = None,
) -> dict | list | None:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method not in ("GET", "PATCH", "POST", "DELETE"):
        raise ValueError(f"Unsupported method: {method!r}")
    resp = await client.request(method, url, headers=headers, json=body, params=params)
    if resp.status_code == 404:
        return None
    if resp.status_code >= 400:
        status = _error_status(resp)
        if status == "ALREADY_EXISTS" or (resp.status_code == 409 and status is None):
            raise DocumentExistsError("Document already exists")
        if status == "FAILED_PRECONDITION" or resp.status_code == 412:
            raise DocumentPreconditionError("Document precondition failed")
        resp.raise_for_status()
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


def _precondition(
    *, exists: bool | None = None, update_time: str | None = None
) -> dict[str, Any] | None:
    if update_time is not None:
        return {"updateTime": update_time}
    if exists is not None:
        return {"exists": exists}
    return None


def _precondition_params(precondition: dict[str, Any] | None) -> list[tuple[str, str]]:
    if not precondition:
        return []
    if "updateTime" in precondition:
        return [("currentDocument.updateTime", precondition["updateTime"])]
    return [("currentDocument.exists", "true" if precondition["exists"] else "false")]


class DocumentSnapshot:
    """Snapshot of a document (id + data + server timestamps).

    ``update_time`` is kept as the raw RFC 3339 string so it can be sent
    back unchanged as a precondition (nanosecond precision matters).
    """

    def __init__(
        self,
        id_: str,
        data: dict,
        *,
        create_time: str | None = None,
        update_time: str | None = None,
    ):
        self.id = id_
        self._data = data
        self.create_time = create_time
        self.update_time = update_time

    def to_dict(self) -> dict:
        return self._data

    @classmethod
    def from_rest(cls, doc: dict) -> DocumentSnapshot:
        name = doc.get("name", "")
        return cls(
            name.split("/")[-1] if name else "",
            decode_fields(doc.get("fields")),
            create_time=doc.get("createTime"),
            update_time=doc.get("updateTime"),
        )


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return self._path.split("/")[-1]

    @property
    def path(self) -> str:
        """Full resource name (projects/.../documents/collection/id)."""
        return self._path

    def collection(self, collection_id: str) -> CollectionReference:
        """Subcollection under this document."""
        return CollectionReference(self._client, f"{self._path}/{collection_id}")

    async def set(self, data: dict[str, Any]) -> None:
        """Create or overwrite the document (PATCH with full replace)."""
        await self._client.request(
            f"{self._client.base_url}/{self._path}",
            method="PATCH",
            body=encode_document(data),
        )

    async def update(
        self,
        data: dict[str, Any],
        *,
        update_time: str | None = None,
    ) -> DocumentSnapshot | None:
        """Update only the given fields.

        With update_time, the write succeeds only if the document has not
        changed since that snapshot (DocumentPreconditionError otherwise).
        Without it, the document must exist. Returns None if it is missing.
        """
        params = [("updateMask.fieldPaths", k) for k in data]
        params += _precondition_params(
            _precondition(exists=True, update_time=update_time)
        )
        out = await self._client.request(
            f"{self._client.base_url}/{self._path}",
            method="PATCH",
            body=encode_document(data),
            params=params,
        )
        if out is None:
            return None
        return DocumentSnapshot.from_rest(out)

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await self._client.request(f"{self._client.base_url}/{self._path}")
        if not out:
            return None
        return DocumentSnapshot.from_rest(out)

    async def delete(self, *, update_time: str | None = None) -> None:
        """Delete the document. Without update_time, idempotent if already missing."""
        await self._client.request(
            f"{self._client.base_url}/{self._path}",
            method="DELETE",
            params=_precondition_params(_precondition(update_time=update_time)),
        )


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "array-contains": "ARRAY_CONTAINS",
}


class _Query:
    """Fluent query builder for a collection; runs via runQuery on the server."""

    def __init__(
        self,
        client: FirestoreRESTClient,
        parent: str,
        collection_id: str,
    ):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filter: dict[str, Any] | None = None
        self._order_by_field: str | None = None
        self._order_direction: str = "ASCENDING"
        self._limit: int = 100

    def where(self, field: str, op: str, value: Any) -> _Query:
        self._filter = {
            "fieldFilter": {
                "field": {"fieldPath": field},
                "op": _OP_MAP.get(op, op),
                "value": _encode_value(value),
            }
        }
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        self._order_by_field = field
        self._order_direction = direction
        return self

    def limit(self, n: int) -> _Query:
        self._limit = n
        return self

    def to_structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {"from": [{"collectionId": self._collection_id}]}
        if self._filter is not None:
            structured["where"] = self._filter
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
        resp = await self._client.request(
            f"{self._client.base_url}/{self._parent}:runQuery",
            method="POST",
            body={"structuredQuery": self.to_structured_query()},
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            yield DocumentSnapshot.from_rest(item["document"])


class CollectionReference:
    """Reference to a collection (top-level or subcollection)."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def add(self, data: dict[str, Any]) -> DocumentSnapshot:
        """Create a document with a server-assigned ID and return it."""
        out = await self._client.request(
            f"{self._client.base_url}/{self._path}",
            method="POST",
            body=encode_document(data),
        )
        return DocumentSnapshot.from_rest(out or {})

    def _query(self) -> _Query:
        parent, collection_id = self._path.rsplit("/", 1)
        return _Query(self._client, parent, collection_id)

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Use .order_by(), .limit(), then .stream()."""
        return self._query().where(field, op, value)

    def order_by(self, field: str, direction: str = "ASCENDING") -> _Query:
        """Start an unfiltered, ordered query."""
        return self._query().order_by(field, direction)


class WriteBatch:
    """Writes committed atomically: all apply or none do."""

    def __init__(self, client: FirestoreRESTClient):
        self._client = client
        self._writes: list[dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._writes)

    def create(self, ref: DocumentReference, data: dict[str, Any]) -> WriteBatch:
        """Write ref only if it does not exist yet."""
        self._writes.append({
            "update": encode_document(data, name=ref.path),
            "currentDocument": {"exists": False},
        })
        return self

    def update(
        self,
        ref: DocumentReference,
        data: dict[str, Any],
        *,
        update_time: str | None = None,
    ) -> WriteBatch:
        """Update the given fields; ref must exist (and be unchanged, with update_time)."""
        self._writes.append({
            "update": encode_document(data, name=ref.path),
            "updateMask": {"fieldPaths": list(data)},
            "currentDocument": _precondition(exists=True, update_time=update_time),
        })
        return self

    def delete(
        self,
        ref: DocumentReference,
        *,
        update_time: str | None = None,
        must_exist: bool = False,
    ) -> WriteBatch:
        """Delete ref, optionally conditional on it being unchanged or present."""
        write: dict[str, Any] = {"delete": ref.path}
        precondition = _precondition(
            exists=True if must_exist else None, update_time=update_time
        )
        if precondition:
            write["currentDocument"] = precondition
        self._writes.append(write)
        return self

    async def commit(self) -> list[dict[str, Any]]:
        """Commit all writes; return Firestore writeResults.

        Raises:
            DocumentExistsError: A create found its document.
            DocumentPreconditionError: Another precondition failed (including a
                document that had to exist but is gone).
        """
        if not self._writes:
            return []
        out = await self._client.request(
            f"{self._client.base_url}/{self._client.database_path}/documents:commit",
            method="POST",
            body={"writes": self._writes},
        )
        if out is None:
            raise DocumentPreconditionError("Document to update no longer exists")
        return out.get("writeResults", []) if isinstance(out, dict) else []


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin).

    credentials may be None for the local emulator or for tests with an
    injected transport; requests are then sent without a bearer token.
    """

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        base_url: str = _BASE,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.database_path = f"projects/{project_id}/databases/(default)"
        self._prefix = f"{self.database_path}/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str | None:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        if self._credentials is None:
            return None
        return await asyncio.to_thread(_get_access_token, self._credentials)

    async def request(
        self,
        url: str,
        method: str = "GET",
        body: dict | None = None,
        params: list[tuple[str, str]] | None = None,
    ) -> dict | list | None:
        return await _request_async(
            self._http,
            url,
            method=method,
            body=body,
            access_token=await self.get_token(),
            params=params or None,
        )

    def collection(self, collection_path: str) -> CollectionReference:
        """Collection by path, e.g. 'connections' or 'conversations/a_b/messages'."""
        return CollectionReference(self, f"{self._prefix}/{collection_path.strip('/')}")

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    async def get_all(
        self, refs: Iterable[DocumentReference]
    ) -> list[DocumentSnapshot]:
        """Fetch several documents in one batchGet call; missing ones are skipped."""
        names = [ref.path for ref in refs]
        if not names:
            return []
        resp = await self.request(
            f"{self.base_url}/{self._prefix}:batchGet",
            method="POST",
            body={"documents": names},
        )
        items = resp if isinstance(resp, list) else []
        return [DocumentSnapshot.from_rest(item["found"]) for item in items if "found" in item]

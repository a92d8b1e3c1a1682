"""In-memory Firestore REST v1 endpoint for httpx.MockTransport.

Covers what the REST client sends: document get/patch/delete with
preconditions, auto-id create, runQuery (single equality filter, one order
field, limit), batchGet and atomic commit. Error responses use the google.rpc
status names Firestore returns.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from itertools import count
from typing import Any

import httpx

from skilllink.infrastructure.firebase._rest_encoding import (
    _decode_value,
    decode_fields,
    encode_fields,
)

PROJECT_ID = "test-project"
BASE_URL = "https://firestore.test/v1"
PREFIX = f"projects/{PROJECT_ID}/databases/(default)/documents"


class FakeFirestore:
    """Documents keyed by path relative to the database root (e.g. 'connections/r1')."""

    def __init__(self) -> None:
        self.docs: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        # Called with each request before it is handled; used to simulate a
        # concurrent writer landing between a read and a conditional write.
        self.hooks: list[Callable[[httpx.Request], None]] = []
        self._clock = count(1)
        self._ids = count(1)

    # Seeding and inspection

    def _tick(self) -> str:
        return f"2025-01-15T12:00:00.{next(self._clock):06d}Z"

    def put(self, path: str, data: dict[str, Any]) -> None:
        """Write a document directly (bypassing preconditions)."""
        now = self._tick()
        existing = self.docs.get(path)
        self.docs[path] = {
            "name": f"{PREFIX}/{path}",
            "fields": encode_fields(data),
            "createTime": existing["createTime"] if existing else now,
            "updateTime": now,
        }

    def data(self, path: str) -> dict[str, Any] | None:
        doc = self.docs.get(path)
        return decode_fields(doc["fields"]) if doc else None

    def paths(self, collection: str) -> list[str]:
        return sorted(p for p in self.docs if p.rsplit("/", 1)[0] == collection)

    # Transport

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for hook in list(self.hooks):
            hook(request)
        path = request.url.path.removeprefix("/v1/")
        body = json.loads(request.content) if request.content else None
        if path.endswith(":commit"):
            return self._commit(body)
        if path.endswith(":runQuery"):
            return self._run_query(path.removesuffix(":runQuery"), body)
        if path.endswith(":batchGet"):
            return self._batch_get(body)
        rel = path.removeprefix(PREFIX).strip("/")
        if request.method == "GET":
            doc = self.docs.get(rel)
            return httpx.Response(200, json=doc) if doc else _error(404, "NOT_FOUND")
        if request.method == "POST":
            return self._add(rel, body)
        if request.method == "PATCH":
            return self._patch(rel, body, request.url.params)
        if request.method == "DELETE":
            return self._delete(rel, request.url.params)
        return _error(400, "INVALID_ARGUMENT")

    def _check(self, rel: str, precondition: dict | None) -> httpx.Response | None:
        if not precondition:
            return None
        doc = self.docs.get(rel)
        if "exists" in precondition:
            if precondition["exists"] and doc is None:
                return _error(404, "NOT_FOUND")
            if not precondition["exists"] and doc is not None:
                return _error(409, "ALREADY_EXISTS")
        if "updateTime" in precondition:
            if doc is None or doc["updateTime"] != precondition["updateTime"]:
                return _error(400, "FAILED_PRECONDITION")
        return None

    def _write(self, rel: str, fields: dict, mask: list[str] | None) -> dict:
        existing = self.docs.get(rel)
        now = self._tick()
        if mask is not None and existing is not None:
            merged = dict(existing["fields"])
            for key in mask:
                if key in fields:
                    merged[key] = fields[key]
                else:
                    merged.pop(key, None)
            fields = merged
        doc = {
            "name": f"{PREFIX}/{rel}",
            "fields": fields,
            "createTime": existing["createTime"] if existing else now,
            "updateTime": now,
        }
        self.docs[rel] = doc
        return doc

    def _add(self, collection: str, body: dict) -> httpx.Response:
        rel = f"{collection}/auto{next(self._ids)}"
        return httpx.Response(200, json=self._write(rel, body.get("fields") or {}, None))

    def _patch(self, rel: str, body: dict, params: httpx.QueryParams) -> httpx.Response:
        precondition: dict[str, Any] = {}
        if "currentDocument.exists" in params:
            precondition["exists"] = params["currentDocument.exists"] == "true"
        if "currentDocument.updateTime" in params:
            precondition["updateTime"] = params["currentDocument.updateTime"]
        failure = self._check(rel, precondition)
        if failure is not None:
            return failure
        mask = params.get_list("updateMask.fieldPaths") or None
        return httpx.Response(200, json=self._write(rel, body.get("fields") or {}, mask))

    def _delete(self, rel: str, params: httpx.QueryParams) -> httpx.Response:
        precondition = (
            {"updateTime": params["currentDocument.updateTime"]}
            if "currentDocument.updateTime" in params
            else None
        )
        failure = self._check(rel, precondition)
        if failure is not None:
            return failure
        self.docs.pop(rel, None)
        return httpx.Response(200, json={})

    def _commit(self, body: dict) -> httpx.Response:
        writes = body.get("writes") or []
        for write in writes:
            name = write["update"]["name"] if "update" in write else write["delete"]
            failure = self._check(name.removeprefix(PREFIX).strip("/"), write.get("currentDocument"))
            if failure is not None:
                return failure
        results = []
        for write in writes:
            if "update" in write:
                rel = write["update"]["name"].removeprefix(PREFIX).strip("/")
                mask = (write.get("updateMask") or {}).get("fieldPaths")
                doc = self._write(rel, write["update"].get("fields") or {}, mask)
                results.append({"updateTime": doc["updateTime"]})
            else:
                self.docs.pop(write["delete"].removeprefix(PREFIX).strip("/"), None)
                results.append({})
        return httpx.Response(200, json={"writeResults": results, "commitTime": self._tick()})

    def _run_query(self, parent: str, body: dict) -> httpx.Response:
        query = body["structuredQuery"]
        rel_parent = parent.removeprefix(PREFIX).strip("/")
        collection = f"{rel_parent}/{query['from'][0]['collectionId']}".strip("/")
        docs = [d for p, d in self.docs.items() if p.rsplit("/", 1)[0] == collection]

        field_filter = (query.get("where") or {}).get("fieldFilter")
        if field_filter:
            assert field_filter["op"] == "EQUAL"
            key = field_filter["field"]["fieldPath"]
            docs = [d for d in docs if d["fields"].get(key) == field_filter["value"]]

        for order in query.get("orderBy") or []:
            key = order["field"]["fieldPath"]
            if key == "__name__":
                sort_key = lambda d: d["name"]  # noqa: E731
            else:
                docs = [d for d in docs if key in d["fields"]]
                sort_key = lambda d, k=key: _decode_value(d["fields"][k])  # noqa: E731
            docs.sort(key=sort_key, reverse=order.get("direction") == "DESCENDING")

        if query.get("limit"):
            docs = docs[: query["limit"]]
        read_time = self._tick()
        if not docs:
            return httpx.Response(200, json=[{"readTime": read_time}])
        return httpx.Response(200, json=[{"document": d, "readTime": read_time} for d in docs])

    def _batch_get(self, body: dict) -> httpx.Response:
        out = []
        for name in body.get("documents") or []:
            doc = self.docs.get(name.removeprefix(PREFIX).strip("/"))
            out.append({"found": doc} if doc else {"missing": name})
        return httpx.Response(200, json=out)


def _error(code: int, status: str) -> httpx.Response:
    return httpx.Response(code, json={"error": {"code": code, "message": status, "status": status}})

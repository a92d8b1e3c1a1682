"""Encode/decode Python values to/from Firestore REST API 'fields' format."""

import base64
from datetime import UTC, datetime
from typing import Any


def encode_timestamp(v: datetime) -> str:
    """RFC 3339 UTC timestamp as Firestore expects it (naive values are taken as UTC)."""
    if v.tzinfo is None:
        v = v.replace(tzinfo=UTC)
    return v.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _encode_value(v: Any) -> dict:
    if v is None:
        return {"nullValue": None}
    if isinstance(v, bool):
        return {"booleanValue": v}
    if isinstance(v, int):
        return {"integerValue": str(v)}
    if isinstance(v, float):
        return {"doubleValue": v}
    if isinstance(v, datetime):
        return {"timestampValue": encode_timestamp(v)}
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, bytes):
        return {"bytesValue": base64.standard_b64encode(v).decode("ascii")}
    if isinstance(v, list | tuple):
        return {"arrayValue": {"values": [_encode_value(x) for x in v]}}
    if isinstance(v, dict):
        return {"mapValue": {"fields": {k: _encode_value(x) for k, x in v.items()}}}
    raise TypeError(f"Unsupported Firestore value type: {type(v)}")


def encode_fields(data: dict[str, Any]) -> dict:
    """Convert a Python dict to a Firestore Document.fields mapping."""
    return {k: _encode_value(v) for k, v in data.items()}


def encode_document(data: dict[str, Any], name: str | None = None) -> dict:
    """Convert a Python dict to a Firestore REST Document (optionally named)."""
    doc: dict[str, Any] = {"fields": encode_fields(data)}
    if name is not None:
        doc["name"] = name
    return doc


def decode_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp (nanosecond precision is truncated to microseconds)."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _decode_value(obj: dict) -> Any:
    if "nullValue" in obj:
        return None
    if "booleanValue" in obj:
        return obj["booleanValue"]
    if "integerValue" in obj:
        return int(obj["integerValue"])
    if "doubleValue" in obj:
        return float(obj["doubleValue"])
    if "timestampValue" in obj:
        return decode_timestamp(obj["timestampValue"])
    if "stringValue" in obj:
        return obj["stringValue"]
    if "bytesValue" in obj:
        return base64.standard_b64decode(obj["bytesValue"])
    if "referenceValue" in obj:
        return obj["referenceValue"]
    if "arrayValue" in obj:
        vals = obj.get("arrayValue", {}).get("values") or []
        return [_decode_value(x) for x in vals]
    if "mapValue" in obj:
        fields = obj["mapValue"].get("fields") or {}
        return {k: _decode_value(x) for k, x in fields.items()}
    return None


def decode_fields(fields: dict | None) -> dict:
    """Convert a Firestore Document.fields mapping to a Python dict."""
    if not fields:
        return {}
    return {k: _decode_value(v) for k, v in fields.items()}

"""Encode/decode Python values to/from Firestore REST API 'fields' format."""

import base64
import re
from datetime import UTC, datetime
from typing import Any

_FRACTION_RE = re.compile(r"\.(\d+)(?=[+-]\d\d:\d\d$)")


class ArrayUnion:
    """Field sentinel: add values not already present (appendMissingElements)."""

    def __init__(self, values: list[Any]) -> None:
        self.values = list(values)


class ArrayRemove:
    """Field sentinel: remove every occurrence of values (removeAllFromArray)."""

    def __init__(self, values: list[Any]) -> None:
        self.values = list(values)


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
        if v.tzinfo is not None:
            v = v.astimezone(UTC)
        return {"timestampValue": v.strftime("%Y-%m-%dT%H:%M:%S.%fZ")}
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, bytes):
        return {"bytesValue": base64.standard_b64encode(v).decode("ascii")}
    if isinstance(v, list | tuple):
        return {"arrayValue": {"values": [_encode_value(x) for x in v]}}
    if isinstance(v, dict):
        return {"mapValue": {"fields": {k: _encode_value(x) for k, x in v.items()}}}
    raise TypeError(f"Unsupported Firestore value type: {type(v)}")


def encode_document(data: dict[str, Any]) -> dict:
    """Convert a Python dict to Firestore REST Document.fields format."""
    return {"fields": {k: _encode_value(v) for k, v in data.items()}}


def split_transforms(
    data: dict[str, Any],
) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    """Separate plain fields from ArrayUnion/ArrayRemove sentinels.

    Returns (plain_fields, field_transforms) where field_transforms is in the
    REST ``updateTransforms`` format.
    """
    plain: dict[str, Any] = {}
    transforms: list[dict[str, Any]] = []
    for key, value in data.items():
        if isinstance(value, ArrayUnion):
            transforms.append(
                {
                    "fieldPath": key,
                    "appendMissingElements": {
                        "values": [_encode_value(x) for x in value.values]
                    },
                }
            )
        elif isinstance(value, ArrayRemove):
            transforms.append(
                {
                    "fieldPath": key,
                    "removeAllFromArray": {
                        "values": [_encode_value(x) for x in value.values]
                    },
                }
            )
        else:
            plain[key] = value
    return plain, transforms


def _parse_timestamp(value: str) -> datetime:
    # Firestore returns nanosecond precision; datetime keeps microseconds.
    value = value.replace("Z", "+00:00")
    match = _FRACTION_RE.search(value)
    if match:
        value = value[: match.start()] + "." + match.group(1)[:6] + value[match.end() :]
    return datetime.fromisoformat(value)


def _decode_value(obj: dict) -> Any:
    if "nullValue" in obj:
        return None
    if "booleanValue" in obj:
        return obj["booleanValue"]
    if "integerValue" in obj:
        return int(obj["integerValue"])
    if "doubleValue" in obj:
        return obj["doubleValue"]
    if "timestampValue" in obj:
        return _parse_timestamp(obj["timestampValue"])
    if "stringValue" in obj:
        return obj["stringValue"]
    if "bytesValue" in obj:
        return base64.standard_b64decode(obj["bytesValue"])
    if "arrayValue" in obj:
        vals = obj.get("arrayValue", {}).get("values") or []
        return [_decode_value(x) for x in vals]
    if "mapValue" in obj:
        fields = obj["mapValue"].get("fields") or {}
        return {k: _decode_value(x) for k, x in fields.items()}
    return None


def decode_document(fields: dict | None) -> dict:
    """Convert Firestore REST Document.fields to a Python dict."""
    if not fields:
        return {}
    return {k: _decode_value(v) for k, v in fields.items()}

"""Parsing of classifier replies that are expected to carry JSON."""

import json
import re
from typing import Any

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def parse_json_reply(reply: str | None) -> Any:
    """Return the JSON value in a model reply, tolerating markdown code fences.

    Raises:
        ValueError: If the reply is empty or does not contain valid JSON.
    """
    if not reply:
        raise ValueError("Empty classifier reply")
    cleaned = _FENCE_RE.sub("", reply).strip()
    if not cleaned:
        raise ValueError("Empty classifier reply")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"Classifier reply is not JSON: {e.msg}") from e


def coerce_flag(value: Any) -> bool | None:
    """Interpret a JSON flag that may come back as a bool or a "true"/"false" string."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return None

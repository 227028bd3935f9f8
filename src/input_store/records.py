from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, TypedDict


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Record(TypedDict):
    # Opaque identifier, None when absent
    id: Any

    # Free text body
    content: Any

    # Category label
    type: Any

    # ISO-8601 UTC string or None
    timestamp: str | None

    tags: List[Any]

    # Opaque passthrough
    priority: Any

    # Workflow state: new unless stated otherwise
    status: Any

    metadata: Dict[str, Any]


def _to_iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _from_epoch_millis(value: int | float) -> str | None:
    try:
        # Sub-millisecond parts truncate toward zero.
        return _to_iso(_EPOCH + timedelta(milliseconds=math.trunc(value)))
    except (OverflowError, ValueError):
        return None


def normalize_timestamp(value: Any) -> str | None:
    """Coerce a timestamp-ish value into an ISO-8601 string, or None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return _to_iso(value)
    if isinstance(value, date):
        return _to_iso(datetime(value.year, value.month, value.day))
    # bool is an int subclass but never a timestamp.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return _from_epoch_millis(value)
    if isinstance(value, str):
        return value
    return None


def _or_default(source: Mapping, key: str, default: Any) -> Any:
    value = source.get(key)
    return default if value is None else value


def sanitize_record(item: Any) -> Record:
    source: Mapping = item if isinstance(item, Mapping) else {}

    tags = source.get("tags")
    metadata = source.get("metadata")

    return {
        "id": source.get("id"),
        "content": _or_default(source, "content", ""),
        "type": source.get("type"),
        "timestamp": normalize_timestamp(source.get("timestamp")),
        "tags": list(tags) if isinstance(tags, (list, tuple)) else [],
        "priority": source.get("priority"),
        "status": _or_default(source, "status", "new"),
        "metadata": dict(metadata) if isinstance(metadata, Mapping) else {},
    }


def sanitize_inputs(inputs: Any) -> List[Record]:
    """Map an arbitrary value into a fresh list of canonical records.

    Anything that is not a list or tuple becomes an empty list. Malformed
    elements degrade to defaults; this never raises.
    """
    if not isinstance(inputs, (list, tuple)):
        return []
    return [sanitize_record(item) for item in inputs]

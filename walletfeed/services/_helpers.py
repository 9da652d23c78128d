"""Shared utilities for the service layer."""

import json
from collections.abc import Mapping
from datetime import UTC, datetime

# JSON column type: outputs / batch_output columns hold a list or a dict.
JsonValue = dict[str, object] | list[object]
Serializable = Mapping[str, object] | list[object]


def now_iso() -> str:
    return datetime.now(UTC).isoformat()


def load_json(raw: str | None) -> JsonValue | None:
    """Deserialize a JSON TEXT column. A list, a dict, or None."""
    if not raw:
        return None
    result: object = json.loads(raw)
    if isinstance(result, dict):
        return dict(result)
    if isinstance(result, list):
        return list(result)
    return None


def dump_json(obj: Serializable | None) -> str | None:
    if obj is None:
        return None
    return json.dumps(obj, default=str)

"""Response payload normalization and encoding.

Handlers return whatever is convenient (dicts, pydantic models, dataclasses,
dates, decimals). Before the value goes back to the peer it is normalized
to plain JSON types with sorted keys, so that every endorsing peer produces
byte-identical payloads for the same logical result.
"""

from __future__ import annotations

import dataclasses
import json
import math
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel


def normalize_payload(value: Any) -> Any:
    """Recursively convert ``value`` into JSON-compatible, deterministic data."""
    if isinstance(value, Enum):
        return normalize_payload(value.value)
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    if isinstance(value, BaseModel):
        return normalize_payload(value.model_dump(mode="json"))
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return normalize_payload(
            {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        )
    if isinstance(value, Mapping):
        return {str(k): normalize_payload(v) for k, v in sorted(value.items(), key=lambda kv: str(kv[0]))}
    if isinstance(value, (set, frozenset)):
        items = [normalize_payload(v) for v in value]
        try:
            return sorted(items)
        except TypeError:
            return sorted(items, key=lambda v: json.dumps(v, sort_keys=True))
    if isinstance(value, (list, tuple)):
        return [normalize_payload(v) for v in value]
    if callable(getattr(value, "to_dict", None)):
        return normalize_payload(value.to_dict())
    raise TypeError(f"Object of type {type(value).__name__} is not serializable as a payload")


def encode_response(value: Any) -> bytes:
    """Encode a handler's return value as the success payload.

    Bytes pass through untouched, ``None`` becomes an empty payload and
    everything else is normalized and written as UTF-8 JSON. Non-finite
    floats are written as ``null``.
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if value is None:
        return b""
    return json.dumps(normalize_payload(value), separators=(",", ":"), allow_nan=False).encode("utf-8")


__all__ = ["normalize_payload", "encode_response"]

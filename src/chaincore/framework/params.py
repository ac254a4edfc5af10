"""Best-effort decoding of raw invocation arguments.

Manifesto:
    The peer hands every argument over as a string. Arguments that are
    valid JSON literals are decoded, everything else is passed through
    as the original string. A plain string argument is the common case,
    not an error, so decoding never raises and never logs. Input nested too
    deeply for the decoder is passed through as well.

Tags:
    chaincore, framework, params, decoding

Doc-Types:
    api-reference
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ArgumentKind(str, Enum):
    """Shape of a decoded argument. ``RAW`` marks a decoding fallback."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    RAW = "raw"


@dataclass(frozen=True)
class ParsedArgument:
    """One decoded argument together with the raw string it came from."""

    kind: ArgumentKind
    value: Any
    raw: Any

    @property
    def fallback(self) -> bool:
        """True when decoding failed and ``value`` is the raw input."""
        return self.kind is ArgumentKind.RAW


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON
    raise ValueError(f"Invalid JSON literal: {name}")


def _kind_of(value: Any) -> ArgumentKind:
    if value is None:
        return ArgumentKind.NULL
    if isinstance(value, bool):
        return ArgumentKind.BOOL
    if isinstance(value, (int, float)):
        return ArgumentKind.NUMBER
    if isinstance(value, str):
        return ArgumentKind.STRING
    if isinstance(value, dict):
        return ArgumentKind.OBJECT
    return ArgumentKind.ARRAY


def decode_argument(raw: Any) -> ParsedArgument:
    """Decode one raw argument, falling back to the raw value on failure."""
    try:
        value = json.loads(raw, parse_constant=_reject_constant)
    except (TypeError, ValueError, RecursionError):
        return ParsedArgument(kind=ArgumentKind.RAW, value=raw, raw=raw)
    return ParsedArgument(kind=_kind_of(value), value=value, raw=raw)


def decode_arguments(raw_arguments: Iterable[Any]) -> list[ParsedArgument]:
    """Decode every argument, preserving count and order."""
    return [decode_argument(raw) for raw in raw_arguments]


def parse_parameters(raw_arguments: Iterable[Any]) -> list[Any]:
    """Return the decoded values of ``raw_arguments``.

    >>> parse_parameters(["123", '"abc"', "not-json"])
    [123, 'abc', 'not-json']
    """
    return [arg.value for arg in decode_arguments(raw_arguments)]


__all__ = [
    "ArgumentKind",
    "ParsedArgument",
    "decode_argument",
    "decode_arguments",
    "parse_parameters",
]

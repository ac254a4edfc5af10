"""
Structured error types for chaincore.

Every failure that leaves the dispatcher is a ``ChaincodeError``: a kind,
a human-readable message rendered from a template, and a structured
``data`` payload. ``ErrorKind`` holds the built-in kinds; chaincodes add
their own as plain strings. The serialized form is what
the peer receives on its failure channel, so callers on the other side can
recover ``kind``, ``message`` and ``data`` without parsing free text.

Manifesto:
    - **Kinds are data:** One exception class, many kinds. A chaincode
      adds a kind by naming it, with an explicit message or a template
      registered through ``register_template``.
    - **Immutable once raised:** The first place that recognizes a
      failure builds the error; nothing downstream edits it.
    - **Wire-ready:** ``serialized`` is the only form that crosses the
      dispatcher boundary.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                     ChaincodeError                        │
        │              (kind, message, data, serialized)            │
        ├──────────────────────────────────────────────────────────┤
        │  MigrationPathNotDefined   MigrationInProgress            │
        │  UnknownFunction           ParsingParametersError         │
        │  UnknownError  (wrapper for everything untyped)           │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> err = ChaincodeError(ErrorKind.UNKNOWN_FUNCTION, {"fn": "transfer"})
    >>> err.message
    "Unknown function 'transfer'"
    >>> ChaincodeError.from_serialized(err.serialized).data["fn"]
    'transfer'

    >>> wrap_error(ValueError("boom")).to_dict()["data"]
    {'message': 'boom'}

    >>> ChaincodeError("AssetNotFound", {"id": "a-1"}, message="no asset a-1").kind_name
    'AssetNotFound'

Tags:
    chaincore, error-handling, error-taxonomy, serialization

Doc-Types:
    api-reference
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any


class ErrorKind(str, Enum):
    """Built-in failure kinds reported through the failure channel."""

    MIGRATION_PATH_NOT_DEFINED = "MigrationPathNotDefined"
    MIGRATION_IN_PROGRESS = "MigrationInProgress"
    UNKNOWN_FUNCTION = "UnknownFunction"
    PARSING_PARAMETERS_ERROR = "ParsingParametersError"
    UNKNOWN_ERROR = "UnknownError"


# Message templates keyed by kind name, formatted with the error's data
_TEMPLATES: dict[str, str] = {
    ErrorKind.MIGRATION_PATH_NOT_DEFINED.value: "The migrations path is not defined for this chaincode",
    ErrorKind.MIGRATION_IN_PROGRESS.value: "A migration pass is already running on this chaincode",
    ErrorKind.UNKNOWN_FUNCTION.value: "Unknown function '{fn}'",
    ErrorKind.PARSING_PARAMETERS_ERROR.value: "Error while parsing parameters: {message}",
    ErrorKind.UNKNOWN_ERROR.value: "An unknown error occurred: {message}",
}


def _kind_name(kind: ErrorKind | str) -> str:
    return kind.value if isinstance(kind, ErrorKind) else kind


def _coerce_kind(kind: ErrorKind | str) -> ErrorKind | str:
    """Map built-in names onto ``ErrorKind``; keep custom names as strings."""
    if isinstance(kind, ErrorKind):
        return kind
    if not isinstance(kind, str) or not kind:
        raise ValueError(f"Error kind must be a non-empty string, got {kind!r}")
    try:
        return ErrorKind(kind)
    except ValueError:
        return kind


def register_template(kind: str, template: str) -> None:
    """Register the message template of a chaincode-defined kind.

    Built-in templates cannot be replaced.
    """
    coerced = _coerce_kind(kind)
    if isinstance(coerced, ErrorKind):
        raise ValueError(f"'{coerced.value}' is a built-in error kind")
    _TEMPLATES[coerced] = template


def render_message(kind: ErrorKind | str, data: Mapping[str, Any]) -> str:
    """Render the template for ``kind``; unknown placeholders leave it raw.

    Raises ``ValueError`` when ``kind`` has no template.
    """
    name = _kind_name(kind)
    template = _TEMPLATES.get(name)
    if template is None:
        raise ValueError(f"No message template for error kind '{name}'; pass message=")
    try:
        return template.format(**data)
    except (KeyError, IndexError, ValueError):
        return template


class ChaincodeError(Exception):
    """
    Typed, serializable chaincode failure.

    Attributes are read-only. ``data`` is exposed as a read-only mapping
    over a private copy of the dict given at construction, so callers
    cannot mutate an error after it was raised.
    """

    def __init__(
        self,
        kind: ErrorKind | str,
        data: Mapping[str, Any] | None = None,
        *,
        message: str | None = None,
    ):
        kind = _coerce_kind(kind)
        payload = dict(data or {})
        text = message if message is not None else render_message(kind, payload)
        super().__init__(text)
        self._kind = kind
        self._message = text
        self._data = MappingProxyType(payload)

    @property
    def kind(self) -> ErrorKind | str:
        """``ErrorKind`` member for built-in kinds, the plain name otherwise."""
        return self._kind

    @property
    def kind_name(self) -> str:
        return _kind_name(self._kind)

    @property
    def message(self) -> str:
        return self._message

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "kind": self.kind_name,
            "message": self._message,
            "data": dict(self._data),
        }

    @property
    def serialized(self) -> bytes:
        """Canonical wire form (UTF-8 JSON) for the failure channel."""
        return json.dumps(self.to_dict(), sort_keys=True, default=str).encode("utf-8")

    @classmethod
    def from_serialized(cls, raw: bytes | str) -> ChaincodeError:
        """Rebuild an error from its wire form."""
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        body = json.loads(raw)
        return cls(body["kind"], body.get("data") or {}, message=body.get("message"))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.kind_name}, {self._message!r})"


def wrap_error(error: BaseException) -> ChaincodeError:
    """Return ``error`` if already typed, else an ``UnknownError`` carrying its message."""
    if isinstance(error, ChaincodeError):
        return error
    return ChaincodeError(ErrorKind.UNKNOWN_ERROR, {"message": str(error)})


__all__ = [
    "ErrorKind",
    "ChaincodeError",
    "register_template",
    "render_message",
    "wrap_error",
]

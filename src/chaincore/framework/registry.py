"""Operation registry for a chaincode instance.

Manifesto:
    Operations are reachable only if they were registered explicitly.
    Nothing is looked up by attribute name on the chaincode object, so
    lifecycle hooks and helpers can never be invoked by accident.

Tags:
    chaincore, framework, registry, operation-lookup

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

OperationFn = Callable[..., Any]

# Lifecycle entry points of the peer contract, never callable as operations
RESERVED_NAMES = frozenset({"Init", "Invoke", "init", "invoke"})


class OperationRegistry:
    """Mapping of operation name to callable, built at construction time."""

    def __init__(self) -> None:
        self._operations: dict[str, OperationFn] = {}

    def register(self, name: str, fn: OperationFn) -> OperationFn:
        """Register ``fn`` under ``name``."""
        if not isinstance(name, str) or not name.strip():
            raise ValueError("operation name must be a non-empty string")
        if name in RESERVED_NAMES:
            raise ValueError(f"Operation name '{name}' is reserved")
        if name in self._operations:
            raise ValueError(f"Operation '{name}' is already registered")
        if not callable(fn):
            raise ValueError(f"Operation '{name}' is not callable")
        self._operations[name] = fn
        logger.debug("operation_registered", name=name, fn=getattr(fn, "__name__", repr(fn)))
        return fn

    def resolve(self, name: str) -> OperationFn | None:
        """Return the callable for ``name`` or ``None``."""
        return self._operations.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __len__(self) -> int:
        return len(self._operations)

    def names(self) -> list[str]:
        """List all registered operation names."""
        return sorted(self._operations)

    def describe(self) -> dict[str, str]:
        # name -> first docstring line
        out: dict[str, str] = {}
        for name, fn in sorted(self._operations.items()):
            doc = (getattr(fn, "__doc__", None) or "").strip().splitlines()
            out[name] = doc[0] if doc else ""
        return out

"""Execution-environment interface.

The dispatcher talks to the hosting peer through exactly four calls:
``get_function_and_parameters``, ``get_tx_id``, ``success`` and ``fail``.
``LocalEnvironment`` is an in-process implementation for the CLI and tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable
from uuid import uuid4

# Peer response status codes
OK = 200
ERROR = 500


@dataclass(frozen=True)
class FunctionAndParameters:
    fcn: str
    params: tuple[str, ...] = ()


@dataclass(frozen=True)
class Response:
    """Outcome of one invocation as handed back to the peer."""

    status: int
    payload: bytes = b""
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status < 400


@runtime_checkable
class ExecutionEnvironment(Protocol):
    def get_function_and_parameters(self) -> FunctionAndParameters: ...

    def get_tx_id(self) -> str: ...

    def success(self, payload: bytes = b"") -> Response: ...

    def fail(self, serialized: bytes | str) -> Response: ...


@dataclass(frozen=True)
class Invocation:
    """A single request, read once from the environment."""

    operation_name: str
    raw_arguments: tuple[str, ...]
    transaction_id: str

    @classmethod
    def from_environment(cls, env: ExecutionEnvironment) -> Invocation:
        call = env.get_function_and_parameters()
        return cls(
            operation_name=call.fcn,
            raw_arguments=tuple(call.params),
            transaction_id=env.get_tx_id(),
        )


@dataclass
class LocalEnvironment:
    """In-process environment for one invocation."""

    fcn: str
    params: Sequence[str] = ()
    tx_id: str = field(default_factory=lambda: uuid4().hex)

    def get_function_and_parameters(self) -> FunctionAndParameters:
        return FunctionAndParameters(fcn=self.fcn, params=tuple(self.params))

    def get_tx_id(self) -> str:
        return self.tx_id

    def success(self, payload: bytes = b"") -> Response:
        return Response(status=OK, payload=payload or b"")

    def fail(self, serialized: bytes | str) -> Response:
        if isinstance(serialized, bytes):
            serialized = serialized.decode("utf-8")
        return Response(status=ERROR, message=serialized)

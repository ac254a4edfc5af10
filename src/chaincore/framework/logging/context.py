"""
Logging context management using contextvars.

Invocation-scoped fields (chaincode name, function, transaction id) are
attached to every log entry emitted while a call is being dispatched,
including entries from user handlers and migration units that never see
the dispatcher's logger.

contextvars keeps concurrent invocations apart, whether the peer drives
them from threads or from tasks on one event loop.
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Any

import structlog


@dataclass
class LogContext:
    """
    Invocation context attached to all log entries.

    chaincode: Name of the chaincode handling the call
    fn: Operation name being invoked
    tx_id: Transaction id allocated by the peer
    step: Current processing step (e.g. "migrations")
    """

    chaincode: str | None = None
    fn: str | None = None
    tx_id: str | None = None
    step: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs) -> LogContext:
        """Create new context with merged values."""
        current = asdict(self)
        current.update({k: v for k, v in kwargs.items() if v is not None})
        return LogContext(**current)


_log_context: ContextVar[LogContext] = ContextVar("chaincore_log_context")  # noqa: B039


def get_context() -> LogContext:
    """Get the current log context."""
    return _log_context.get(LogContext())


def set_context(
    chaincode: str | None = None,
    fn: str | None = None,
    tx_id: str | None = None,
    step: str | None = None,
) -> LogContext:
    """
    Set the current log context.

    This replaces the current context. Use bind_context() to add to existing.
    """
    ctx = LogContext(chaincode=chaincode, fn=fn, tx_id=tx_id, step=step)
    _log_context.set(ctx)
    return ctx


def bind_context(**kwargs) -> LogContext:
    """Merge values into the current context."""
    updated = get_context().merge(**kwargs)
    _log_context.set(updated)
    return updated


def clear_context() -> None:
    """Clear the current context (reset to empty)."""
    _log_context.set(LogContext())


def add_context_processor(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Structlog processor that adds invocation context to every log entry.

    Registered in configure_logging(); explicit keys on the event win.
    """
    for key, value in get_context().to_dict().items():
        if key not in event_dict:
            event_dict[key] = value
    return event_dict


def get_logger(name: str | None = None) -> Any:
    """
    Get a structured logger.

    Args:
        name: Logger name (typically __name__ or "chaincode/<name>")
    """
    return structlog.get_logger(name)

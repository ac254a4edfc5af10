"""
Chaincore Logging - Structured, invocation-aware logging.

This module provides:
- Structured logging with structlog
- Invocation context propagation via contextvars
- Settings-based configuration

Usage:
    from chaincore.framework.logging import configure_logging, get_logger, set_context

    configure_logging()
    log = get_logger(__name__)

    set_context(chaincode="Assets", fn="transfer", tx_id="abc-123")
    log.info("transfer.checked")   # carries chaincode/fn/tx_id
"""

from chaincore.framework.logging.config import configure_logging, is_configured
from chaincore.framework.logging.context import (
    LogContext,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    set_context,
)

__all__ = [
    "configure_logging",
    "is_configured",
    "get_logger",
    "set_context",
    "clear_context",
    "get_context",
    "bind_context",
    "LogContext",
]

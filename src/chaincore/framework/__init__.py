"""
Chaincore Framework - invocation handling for chaincodes.

This module provides:
- Chaincode base class with lifecycle hooks
- Explicit operation registry
- Dispatcher with uniform error reporting
- Best-effort parameter decoding
- Transaction helper and execution-environment interface
- Structured logging with invocation context
"""

from chaincore.framework.chaincode import Chaincode
from chaincore.framework.context import TransactionHelper
from chaincore.framework.dispatcher import Dispatcher
from chaincore.framework.environment import (
    ExecutionEnvironment,
    FunctionAndParameters,
    Invocation,
    LocalEnvironment,
    Response,
)
from chaincore.framework.params import ArgumentKind, ParsedArgument, decode_argument, parse_parameters
from chaincore.framework.registry import RESERVED_NAMES, OperationRegistry

__all__ = [
    # Chaincode
    "Chaincode",
    "Dispatcher",
    "TransactionHelper",
    # Registry
    "OperationRegistry",
    "RESERVED_NAMES",
    # Environment
    "ExecutionEnvironment",
    "FunctionAndParameters",
    "Invocation",
    "LocalEnvironment",
    "Response",
    # Params
    "ArgumentKind",
    "ParsedArgument",
    "decode_argument",
    "parse_parameters",
]

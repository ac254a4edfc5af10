"""
Dispatcher - routes one peer invocation to a registered operation.

Flow per call:
    read invocation -> resolve operation -> parse params + build helper
    -> call handler (awaiting if needed) -> encode payload -> success

Any failure along the way ends as ``env.fail(error.serialized)``; nothing
escapes ``invoke`` as an untyped exception.

Argument values and return payloads are never logged.
"""

from __future__ import annotations

import inspect
from typing import Any

from chaincore.core.errors import ChaincodeError, ErrorKind, wrap_error
from chaincore.core.payload import encode_response
from chaincore.framework.context import TransactionHelper, TransactionHelperFactory
from chaincore.framework.environment import ExecutionEnvironment, Invocation, Response
from chaincore.framework.logging import clear_context, get_logger, set_context
from chaincore.framework.params import parse_parameters
from chaincore.framework.registry import OperationRegistry


class Dispatcher:
    """
    Dispatcher for chaincode invocations.

    Args:
        name: Chaincode name, used to tag log events
        registry: Operations this chaincode exposes
        tx_helper_factory: Builds the per-call helper from the stub
        logger: Logging port; defaults to ``chaincode/<name>``
    """

    def __init__(
        self,
        name: str,
        registry: OperationRegistry,
        *,
        tx_helper_factory: TransactionHelperFactory = TransactionHelper,
        logger: Any | None = None,
    ) -> None:
        self.name = name
        self._registry = registry
        self._tx_helper_factory = tx_helper_factory
        self._log = logger if logger is not None else get_logger(f"chaincode/{name}")

    def setup_invoke(self, stub: ExecutionEnvironment, raw_arguments: tuple[str, ...]) -> tuple[list[Any], Any]:
        """Parse arguments and build the transaction helper for one call."""
        try:
            return parse_parameters(raw_arguments), self._tx_helper_factory(stub)
        except Exception as e:
            raise ChaincodeError(ErrorKind.PARSING_PARAMETERS_ERROR, {"message": str(e)}) from e

    async def invoke(self, env: ExecutionEnvironment) -> Response:
        """
        Run one invocation to completion.

        Returns ``env.success(payload)`` or ``env.fail(serialized_error)``.
        """
        fn: str | None = None
        tx_id: str | None = None
        log = self._log.bind(chaincode=self.name)

        try:
            invocation = Invocation.from_environment(env)
            fn, tx_id = invocation.operation_name, invocation.transaction_id
            log = log.bind(fn=fn, tx_id=tx_id)
            set_context(chaincode=self.name, fn=fn, tx_id=tx_id)

            log.info("invoke.started", arg_count=len(invocation.raw_arguments))

            method = self._registry.resolve(fn)
            if method is None:
                raise ChaincodeError(ErrorKind.UNKNOWN_FUNCTION, {"fn": fn})

            parsed, tx_helper = self.setup_invoke(env, invocation.raw_arguments)

            result = method(env, tx_helper, *parsed)
            if inspect.isawaitable(result):
                result = await result

            payload = encode_response(result)

            log.info("invoke.completed")
            return env.success(payload)

        except Exception as e:
            error = wrap_error(e)
            log.error(
                "invoke.failed",
                error_kind=error.kind_name,
                error_message=error.message,
                error_data=dict(error.data),
                # stack only for failures that did not start as a ChaincodeError
                exc_info=error is not e or e.__cause__ is not None,
            )
            return env.fail(error.serialized)

        finally:
            clear_context()

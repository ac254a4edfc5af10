"""Chaincode base - the handler the peer talks to.

Manifesto:
    A chaincode is a named set of operations plus two lifecycle entry
    points (``init`` and ``invoke``). Everything a concrete chaincode can
    customize (migrations path, migration executor, transaction helper,
    logger) is handed in through the constructor.

Usage:
    chaincode = Chaincode("Assets", migrations_path="migrations/")

    @chaincode.operation()
    async def transfer(stub, tx_helper, asset_id, owner):
        ...
        return {"asset_id": asset_id, "owner": owner}

    response = await chaincode.invoke(stub)

Subclasses register their methods in ``__init__``::

    class Assets(Chaincode):
        def __init__(self, **kwargs):
            super().__init__(**kwargs)
            self.register("transfer", self.transfer)

Tags:
    chaincore, framework, chaincode, lifecycle, dispatch

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from chaincore.core.config import get_settings
from chaincore.core.migrations import MigrationExecutor, MigrationRunner
from chaincore.framework.context import TransactionHelper, TransactionHelperFactory
from chaincore.framework.dispatcher import Dispatcher
from chaincore.framework.environment import ExecutionEnvironment, Response
from chaincore.framework.logging import bind_context, get_context, get_logger, set_context
from chaincore.framework.registry import OperationFn, OperationRegistry


class Chaincode:
    """
    Base chaincode with built-in ``ping`` and ``runMigrations`` operations.

    Args:
        name: Chaincode name (defaults to the class name)
        migrations_path: Directory of migration units; falls back to
            ``CHAINCORE_MIGRATIONS_PATH``
        migration_executor: Runs the units; defaults to the module executor
        tx_helper_factory: Builds the per-call helper from the stub
        logger: Logging port; defaults to ``chaincode/<name>``
    """

    def __init__(
        self,
        name: str | None = None,
        *,
        migrations_path: str | Path | None = None,
        migration_executor: MigrationExecutor | None = None,
        tx_helper_factory: TransactionHelperFactory = TransactionHelper,
        logger: Any | None = None,
    ) -> None:
        self.name = name or type(self).__name__
        self.logger = logger if logger is not None else get_logger(f"chaincode/{self.name}")

        if migrations_path is None:
            migrations_path = get_settings().migrations_path
        self._migrations = MigrationRunner(migration_executor, migrations_path)

        self._registry = OperationRegistry()
        self._dispatcher = Dispatcher(
            self.name,
            self._registry,
            tx_helper_factory=tx_helper_factory,
            logger=self.logger,
        )

        self.register("ping", self.ping)
        self.register("runMigrations", self.run_migrations)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str, fn: OperationFn) -> OperationFn:
        """Expose ``fn`` as operation ``name``."""
        return self._registry.register(name, fn)

    def operation(self, name: str | None = None) -> Callable[[OperationFn], OperationFn]:
        """Decorator form of :meth:`register`; defaults to the function name."""

        def decorator(fn: OperationFn) -> OperationFn:
            self.register(name or fn.__name__, fn)
            return fn

        return decorator

    @property
    def operations(self) -> list[str]:
        return self._registry.names()

    @property
    def registry(self) -> OperationRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def init(self, env: ExecutionEnvironment) -> Response:
        """Called when the chaincode is instantiated or upgraded."""
        self.logger.info("chaincode.instantiated", chaincode=self.name)
        return env.success()

    async def invoke(self, env: ExecutionEnvironment) -> Response:
        """Route one invocation to the registered operation."""
        return await self._dispatcher.invoke(env)

    # ------------------------------------------------------------------
    # Built-in operations
    # ------------------------------------------------------------------

    async def ping(self, stub: Any, tx_helper: Any, *_args: Any) -> str:
        """Returns 'pong' when everything is correct."""
        return "pong"

    async def run_migrations(self, stub: Any, tx_helper: Any, *args: Any) -> Any:
        """Run pending migrations for this chaincode.

        Log entries emitted during the pass carry ``step="migrations"``.
        """
        previous = get_context()
        bind_context(step="migrations")
        try:
            return await self._migrations.run(self, stub, tx_helper, args)
        finally:
            set_context(**previous.to_dict())

    @property
    def migrating(self) -> bool:
        return self._migrations.migrating

    @property
    def migrations_path(self) -> str | Path | None:
        return self._migrations.migrations_path

"""Migration pass orchestration.

``MigrationRunner`` owns the migrating flag of one chaincode instance and
delegates the actual unit ordering and execution to a
:class:`~chaincore.core.migrations.executor.MigrationExecutor`.

Only one pass may run per runner at a time. A second call that arrives
while a pass is in flight is rejected with ``MigrationInProgress`` instead
of racing on the flag.
"""

from __future__ import annotations

import inspect
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog

from chaincore.core.errors import ChaincodeError, ErrorKind
from chaincore.core.migrations.executor import MigrationExecutor, ModuleMigrationExecutor

logger = structlog.get_logger(__name__)


class MigrationRunner:
    """Runs pending migrations for one chaincode instance.

    Parameters
    ----------
    executor
        Resolves and runs units. Defaults to :class:`ModuleMigrationExecutor`.
    migrations_path
        Where the units live. ``None`` means migrations are not configured
        and every pass fails with ``MigrationPathNotDefined``.
    """

    def __init__(
        self,
        executor: MigrationExecutor | None = None,
        migrations_path: str | Path | None = None,
    ) -> None:
        self._executor = executor or ModuleMigrationExecutor()
        self._migrations_path = migrations_path
        self._lock = threading.Lock()
        self._migrating = False

    @property
    def migrating(self) -> bool:
        return self._migrating

    @property
    def migrations_path(self) -> str | Path | None:
        return self._migrations_path

    @property
    def executor(self) -> MigrationExecutor:
        return self._executor

    async def run(
        self,
        chaincode: Any,
        stub: Any,
        tx_helper: Any,
        args: Sequence[Any] = (),
    ) -> Any:
        """Run one migration pass and return the last applied unit's result."""
        if not self._migrations_path:
            raise ChaincodeError(ErrorKind.MIGRATION_PATH_NOT_DEFINED)

        if not self._lock.acquire(blocking=False):
            raise ChaincodeError(ErrorKind.MIGRATION_IN_PROGRESS)

        try:
            self._migrating = True
            logger.info("migrations.started", path=str(self._migrations_path))
            result = self._executor.run(self._migrations_path, chaincode, stub, tx_helper, list(args))
            if inspect.isawaitable(result):
                result = await result
            logger.info("migrations.completed", path=str(self._migrations_path))
            return result
        finally:
            self._migrating = False
            self._lock.release()

"""Migration executors.

An executor resolves the migration units found at a path and runs the
pending ones in a deterministic order. ``ModuleMigrationExecutor`` treats
every ``*.py`` file in the directory as one unit and runs them in filename
order, so units are conventionally named ``001_add_owner_index.py``,
``002_backfill_balances.py`` and so on.

Each unit module defines::

    def migrate(chaincode, stub, tx_helper, args):   # or ``async def``
        ...

Already-applied units are skipped according to a ``MigrationTracker``.
"""

from __future__ import annotations

import importlib.util
import inspect
from collections.abc import Sequence
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol, runtime_checkable

import structlog

logger = structlog.get_logger(__name__)


@runtime_checkable
class MigrationExecutor(Protocol):
    """Runs every pending unit at ``path`` and returns the last unit's result.

    ``run`` may be a plain or a coroutine function.
    """

    def run(
        self,
        path: str | Path,
        chaincode: Any,
        stub: Any,
        tx_helper: Any,
        args: Sequence[Any],
    ) -> Any: ...


class MigrationTracker(Protocol):
    """Records which units have already been applied."""

    def is_applied(self, name: str) -> bool: ...

    def record(self, name: str) -> None: ...


class InMemoryMigrationTracker:
    """Process-local tracker; applied units are forgotten on restart."""

    def __init__(self) -> None:
        self._applied: list[str] = []

    def is_applied(self, name: str) -> bool:
        return name in self._applied

    def record(self, name: str) -> None:
        if name not in self._applied:
            self._applied.append(name)

    @property
    def applied(self) -> list[str]:
        return list(self._applied)


class ModuleMigrationExecutor:
    """Applies Python migration modules from a directory in filename order.

    Parameters
    ----------
    tracker
        Where applied unit names are recorded. Defaults to an
        :class:`InMemoryMigrationTracker`.
    entrypoint
        Name of the callable each unit exposes. Defaults to ``migrate``.

    Example::

        executor = ModuleMigrationExecutor()
        chaincode = Chaincode("Assets", migrations_path="migrations/",
                              migration_executor=executor)
    """

    def __init__(
        self,
        tracker: MigrationTracker | None = None,
        *,
        entrypoint: str = "migrate",
    ) -> None:
        self.tracker = tracker or InMemoryMigrationTracker()
        self.entrypoint = entrypoint

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(
        self,
        path: str | Path,
        chaincode: Any,
        stub: Any,
        tx_helper: Any,
        args: Sequence[Any],
    ) -> Any:
        """Apply all pending units; stop and re-raise on the first failure."""
        result = None
        for unit_file in self.discover(path):
            name = unit_file.stem
            if self.tracker.is_applied(name):
                logger.debug("migration.skipped", migration=name)
                continue

            try:
                fn = getattr(self._load(unit_file), self.entrypoint)
                result = fn(chaincode, stub, tx_helper, list(args))
                if inspect.isawaitable(result):
                    result = await result
            except Exception as exc:
                logger.error("migration.failed", migration=name, error=str(exc))
                raise

            self.tracker.record(name)
            logger.info("migration.applied", migration=name)

        return result

    def discover(self, path: str | Path) -> list[Path]:
        """Return sorted unit files in ``path`` (``_``-prefixed files excluded)."""
        directory = Path(path)
        if not directory.is_dir():
            return []
        return sorted(p for p in directory.glob("*.py") if not p.name.startswith("_"))

    def pending(self, path: str | Path) -> list[str]:
        """Names of units not yet recorded as applied."""
        return [p.stem for p in self.discover(path) if not self.tracker.is_applied(p.stem)]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _load(self, unit_file: Path) -> ModuleType:
        spec = importlib.util.spec_from_file_location(f"chaincore_migration_{unit_file.stem}", unit_file)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load migration unit: {unit_file}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

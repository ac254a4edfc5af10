"""Migration orchestration for chaincore.

Manifesto:
    Ledger state evolves with the chaincode. Migrations are ordered,
    idempotent units run during an explicit pass, never implicitly on
    activation, and the chaincode knows when a pass is in progress.

Modules
-------
runner      MigrationRunner: path check, single-flight guard, migrating flag
executor    MigrationExecutor protocol and the module-based default executor

Tags:
    chaincore, migrations, idempotent, ledger-state

Doc-Types:
    package-overview
"""

from chaincore.core.migrations.executor import (
    InMemoryMigrationTracker,
    MigrationExecutor,
    MigrationTracker,
    ModuleMigrationExecutor,
)
from chaincore.core.migrations.runner import MigrationRunner

__all__ = [
    "MigrationRunner",
    "MigrationExecutor",
    "MigrationTracker",
    "InMemoryMigrationTracker",
    "ModuleMigrationExecutor",
]

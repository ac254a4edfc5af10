"""Per-invocation transaction helper.

The helper wraps the invocation's stub. Chaincodes that need more
(ledger query helpers, identity checks) supply their own factory; the only
contract is that the factory accepts the stub as its sole argument.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


class TransactionHelper:
    """Default helper: exposes the stub and its transaction id."""

    def __init__(self, stub: Any):
        self._stub = stub

    @property
    def stub(self) -> Any:
        return self._stub

    @property
    def tx_id(self) -> str:
        return self._stub.get_tx_id()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(tx_id={self.tx_id!r})"


TransactionHelperFactory = Callable[[Any], Any]

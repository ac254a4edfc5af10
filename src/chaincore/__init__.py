"""
chaincore - dispatch core for ledger chaincodes.

Resolves named operations, decodes their string arguments, runs them with a
per-call transaction helper, encodes the result and reports failures as
typed, serializable errors. Also runs ordered migrations behind a busy flag.
"""

from chaincore.core.errors import ChaincodeError, ErrorKind
from chaincore.framework import Chaincode, LocalEnvironment, Response, TransactionHelper

__version__ = "0.1.0"

__all__ = [
    "Chaincode",
    "ChaincodeError",
    "ErrorKind",
    "LocalEnvironment",
    "Response",
    "TransactionHelper",
    "__version__",
]

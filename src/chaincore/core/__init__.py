"""
Chaincore Core - backend-agnostic primitives.

- errors      ChaincodeError taxonomy and wire serialization
- payload     Response payload normalization and encoding
- migrations  Migration runner and executors
- config      Settings
"""

from chaincore.core.errors import ChaincodeError, ErrorKind, register_template, wrap_error
from chaincore.core.payload import encode_response, normalize_payload

__all__ = [
    "ChaincodeError",
    "ErrorKind",
    "register_template",
    "wrap_error",
    "encode_response",
    "normalize_payload",
]

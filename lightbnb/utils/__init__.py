"""
Utility modules for the LightBnB data-access layer.
"""

from .exceptions import (
    LightBnBError,
    RecordNotFoundError,
    StoreOperationError,
)
from .passwords import hash_password, verify_password

__all__ = [
    "LightBnBError",
    "RecordNotFoundError",
    "StoreOperationError",
    "hash_password",
    "verify_password",
]

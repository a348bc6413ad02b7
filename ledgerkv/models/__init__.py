"""
Data models for the ledger key-value contract.
"""

from ledgerkv.models.exceptions import (
    ContractError,
    DecodingError,
    IntentError,
    InvalidArgumentsError,
    NotFoundError,
    UnknownTransactionError,
)
from ledgerkv.models.key_value import KeyValue

__all__ = [
    "ContractError",
    "DecodingError",
    "IntentError",
    "InvalidArgumentsError",
    "KeyValue",
    "NotFoundError",
    "UnknownTransactionError",
]

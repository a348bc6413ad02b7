"""
The key-value contract and the machinery that invokes it.
"""

from ledgerkv.contract.context import TransactionContext
from ledgerkv.contract.contract import KeyValueContract
from ledgerkv.contract.dispatcher import ContractDispatcher
from ledgerkv.contract.transaction import Intent, TransactionInfo, transaction

__all__ = [
    "ContractDispatcher",
    "Intent",
    "KeyValueContract",
    "TransactionContext",
    "TransactionInfo",
    "transaction",
]

"""
Key-value smart contract over a host-supplied ledger state.

This package provides:
- KeyValueContract - put/get/getAll/delete/keyExists with hex-encoded values
- ContractDispatcher - invoke contract transactions by name
- InMemoryLedgerState - ordered in-memory ledger used by the gateway and tests
"""

from ledgerkv.contract.contract import KeyValueContract
from ledgerkv.contract.dispatcher import ContractDispatcher
from ledgerkv.models.memory_state import InMemoryLedgerState

__all__ = ["ContractDispatcher", "InMemoryLedgerState", "KeyValueContract"]

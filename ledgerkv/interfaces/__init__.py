"""
Abstract base classes for the ledger state the contract runs against.
"""

from ledgerkv.interfaces.ledger_state import LedgerState
from ledgerkv.interfaces.range_scannable import RangeScannable

__all__ = ["LedgerState", "RangeScannable"]

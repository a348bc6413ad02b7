"""
LedgerState abstract base class for the host's key-value world state.
"""

from abc import abstractmethod

from ledgerkv.interfaces.range_scannable import RangeScannable


class LedgerState(RangeScannable):
    """
    Key-value accessor supplied by the hosting ledger runtime.

    The contract owns no state of its own; every read and write goes
    through an instance of this class handed in with the transaction
    context.

    Implementations:
    - InMemoryLedgerState: ordered dict-backed state for local runs and tests
    """

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """
        Retrieve the raw value stored under a key.

        Args:
            key: The key to look up.

        Returns:
            The stored bytes, or None (or b"") if nothing is stored.
        """
        pass

    @abstractmethod
    def put(self, key: str, value: bytes) -> None:
        """
        Write a value, replacing whatever was stored under the key.

        Args:
            key: The key to write.
            value: Raw bytes to store.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        Remove a key from the state.

        Args:
            key: The key to remove.
        """
        pass

"""
RangeScannable protocol for stores that support ordered range scans.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from ledgerkv.models.key_value import KeyValue


class RangeScannable(ABC):
    """
    Protocol for stores that can iterate over a lexically ordered key range.

    Implementations must support:
    - Full iteration via __iter__
    - Range-bounded iteration via scan(start, end)
    """

    def __iter__(self) -> Iterator[KeyValue]:
        """Return an iterator over all entries in key order."""
        return self.scan("", "")

    @abstractmethod
    def scan(self, start: str = "", end: str = "") -> Iterator[KeyValue]:
        """
        Return an iterator over entries in the specified range.

        Args:
            start: Start key (inclusive). Empty string starts from the beginning.
            end: End key (exclusive). Empty string iterates to the end.

        Returns:
            Iterator yielding KeyValue records in lexical key order.
        """
        pass

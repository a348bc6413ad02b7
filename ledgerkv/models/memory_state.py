"""
InMemoryLedgerState - ordered in-memory ledger state.
"""

import bisect
from collections.abc import Iterator

from ledgerkv.interfaces.ledger_state import LedgerState
from ledgerkv.models.key_value import KeyValue


class InMemoryLedgerState(LedgerState):
    """
    Dict-backed ledger state with a sorted key index.

    Mirrors the host-side rules of a ledger shim:
    - Written keys must be non-empty
    - Writing an empty value removes the key
    - Deleting an absent key is a no-op
    - Scans are lexically ordered, start inclusive and end exclusive

    Point reads and writes are O(1) for the dict plus O(N) for keeping
    the sorted key list up to date on inserts and removals.
    """

    def __init__(self, entries: dict[str, bytes] | None = None) -> None:
        self._values: dict[str, bytes] = {}
        self._sorted_keys: list[str] = []

        for key, value in (entries or {}).items():
            self.put(key, value)

    def get(self, key: str) -> bytes | None:
        return self._values.get(key)

    def put(self, key: str, value: bytes) -> None:
        self._check_key(key)
        if not value:
            self.delete(key)
            return

        if key not in self._values:
            bisect.insort(self._sorted_keys, key)
        self._values[key] = bytes(value)

    def delete(self, key: str) -> None:
        if self._values.pop(key, None) is None:
            return

        idx = bisect.bisect_left(self._sorted_keys, key)
        del self._sorted_keys[idx]

    def scan(self, start: str = "", end: str = "") -> Iterator[KeyValue]:
        start_idx = bisect.bisect_left(self._sorted_keys, start) if start else 0
        if end:
            end_idx = bisect.bisect_left(self._sorted_keys, end)
        else:
            end_idx = len(self._sorted_keys)

        # Slice copies the keys, so writes during iteration are safe
        for key in self._sorted_keys[start_idx:end_idx]:
            value = self._values.get(key)
            if value is not None:
                yield KeyValue(key, value)

    def size(self) -> int:
        """Return the number of stored keys."""
        return len(self._sorted_keys)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return key in self._values

    @staticmethod
    def _check_key(key: str) -> None:
        if not key:
            raise ValueError("key must not be an empty string")

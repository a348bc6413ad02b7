"""
KeyValue record yielded by ledger range scans.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class KeyValue:
    """
    A single ledger entry.

    Attributes:
        key: The ledger key, exactly as stored.
        value: The raw stored bytes.
    """

    key: str
    value: bytes

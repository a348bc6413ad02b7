"""
Per-invocation transaction context.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from ledgerkv.interfaces.ledger_state import LedgerState


class TransactionLogger(logging.LoggerAdapter):
    """Logger adapter that tags every message with the transaction id."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        return f"[tx {self.extra['tx_id']}] {msg}", kwargs


@dataclass
class TransactionContext:
    """
    Handle passed to every contract operation.

    Attributes:
        ledger: Accessor for the host's ledger state.
        tx_id: Identifier of the transaction being executed.
        logger: Logger scoped to this transaction.
    """

    ledger: LedgerState
    tx_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    logger: logging.LoggerAdapter = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.logger = TransactionLogger(
            logging.getLogger("ledgerkv.contract"), {"tx_id": self.tx_id}
        )

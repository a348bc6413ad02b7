"""
Decorator and metadata for contract transaction functions.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class Intent(str, Enum):
    """Whether a transaction writes ledger state or only queries it."""

    SUBMIT = "submit"
    EVALUATE = "evaluate"


@dataclass(frozen=True)
class TransactionInfo:
    """
    Registration record for a contract method.

    Attributes:
        name: Name the transaction is invoked by.
        intent: Submit or evaluate.
        method: Name of the Python method implementing it.
    """

    name: str
    intent: Intent
    method: str


TRANSACTION_ATTR = "__transaction__"


def transaction(name: str | None = None, intent: Intent = Intent.SUBMIT):
    """Decorator for registering a contract method as a transaction"""

    def decorator(func: Callable) -> Callable:
        info = TransactionInfo(
            name=name or func.__name__, intent=intent, method=func.__name__
        )
        setattr(func, TRANSACTION_ATTR, info)
        return func

    return decorator

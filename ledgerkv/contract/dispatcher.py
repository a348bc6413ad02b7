"""
ContractDispatcher - invoke contract transactions by name.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from ledgerkv.contract.context import TransactionContext
from ledgerkv.contract.transaction import TRANSACTION_ATTR, Intent, TransactionInfo
from ledgerkv.interfaces.ledger_state import LedgerState
from ledgerkv.models.exceptions import (
    IntentError,
    InvalidArgumentsError,
    UnknownTransactionError,
)

logger = logging.getLogger(__name__)


class ContractDispatcher:
    """
    Routes named invocations with string arguments to a contract.

    This is the host side of the contract: it builds a fresh
    TransactionContext for every call, checks the arguments against the
    method signature and turns the return value into text.

    Contract errors propagate unchanged; nothing is retried.
    """

    def __init__(self, contract: Any, ledger: LedgerState) -> None:
        """
        Args:
            contract: Object whose methods are marked with @transaction.
            ledger: Ledger state handed to every transaction.
        """
        self._contract = contract
        self._ledger = ledger
        self._routes: dict[str, tuple[TransactionInfo, Callable, int]] = {}

        for _, member in inspect.getmembers(contract, inspect.ismethod):
            info = getattr(member, TRANSACTION_ATTR, None)
            if info is None:
                continue
            if info.name in self._routes:
                raise ValueError(f"Duplicate transaction name: {info.name}")

            # Bound method: first remaining parameter is ctx
            params = list(inspect.signature(member).parameters.values())
            self._routes[info.name] = (info, member, len(params) - 1)

    def transactions(self) -> list[TransactionInfo]:
        """Return registered transactions sorted by name."""
        return sorted((info for info, _, _ in self._routes.values()), key=lambda i: i.name)

    def metadata(self) -> dict[str, Any]:
        """Return the contract name, version and registered transactions."""
        return {
            "name": getattr(self._contract, "name", type(self._contract).__name__),
            "version": getattr(self._contract, "VERSION", ""),
            "transactions": [
                {"name": info.name, "intent": info.intent.value}
                for info in self.transactions()
            ],
        }

    def submit(self, name: str, *args: str) -> str:
        """
        Invoke a transaction that may write ledger state.

        Args:
            name: Transaction name.
            *args: String arguments, passed positionally after the context.

        Returns:
            The serialized result.
        """
        return self._invoke(name, args, Intent.SUBMIT)

    def evaluate(self, name: str, *args: str) -> str:
        """
        Invoke a query transaction.

        Raises:
            IntentError: If the transaction is registered with submit intent.
        """
        return self._invoke(name, args, Intent.EVALUATE)

    def _invoke(self, name: str, args: tuple[str, ...], intent: Intent) -> str:
        route = self._routes.get(name)
        if route is None:
            raise UnknownTransactionError(name)

        info, method, arity = route
        if intent == Intent.EVALUATE and info.intent == Intent.SUBMIT:
            raise IntentError(f"Transaction {name} must be submitted, not evaluated")

        if len(args) != arity:
            raise InvalidArgumentsError(
                f"Transaction {name} expects {arity} argument(s), got {len(args)}"
            )
        for arg in args:
            if not isinstance(arg, str):
                raise InvalidArgumentsError(
                    f"Transaction {name} arguments must be strings, got {type(arg).__name__}"
                )

        ctx = TransactionContext(self._ledger)
        logger.debug(f"{intent.value} {name} tx={ctx.tx_id}")
        result = method(ctx, *args)
        return self.serialize(result)

    @staticmethod
    def serialize(result: Any) -> str:
        """Convert a transaction return value to its text form."""
        if result is None:
            return ""
        if isinstance(result, bool):
            return "true" if result else "false"
        if isinstance(result, str):
            return result
        raise TypeError(f"Cannot serialize transaction result of type {type(result).__name__}")

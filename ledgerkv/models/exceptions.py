"""
Custom exceptions for the key-value contract.
"""


class ContractError(Exception):
    """
    Base class for errors that fail a transaction.

    Every subclass carries a stable ``code`` so callers outside the
    process can tell failure kinds apart without parsing messages.
    """

    code = "CONTRACT_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DecodingError(ContractError):
    """Raised when a caller-supplied batch or hex value cannot be decoded."""

    code = "DECODING_ERROR"


class NotFoundError(ContractError):
    """
    Raised when get or delete target a key with no (or an empty) value.
    """

    code = "KEY_NOT_FOUND"

    def __init__(self, key: str):
        """
        Initialize not-found error.

        Args:
            key: The key that was looked up.
        """
        self.key = key
        super().__init__(f"Key {key} does not exist")


class UnknownTransactionError(ContractError):
    """Raised when a transaction name is not registered on the contract."""

    code = "UNKNOWN_TRANSACTION"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown transaction: {name}")


class InvalidArgumentsError(ContractError):
    """Raised when a transaction is invoked with the wrong arguments."""

    code = "INVALID_ARGUMENTS"


class IntentError(ContractError):
    """Raised when a submit transaction is sent for evaluation."""

    code = "INTENT_MISMATCH"

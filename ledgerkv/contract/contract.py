"""
KeyValueContract - key-value smart contract over the ledger state.
"""

from ledgerkv.contract.codec import decode_batch, decode_hex, encode_batch, encode_hex
from ledgerkv.contract.context import TransactionContext
from ledgerkv.contract.transaction import Intent, transaction
from ledgerkv.models.exceptions import NotFoundError


class KeyValueContract:
    """
    Hex-encoded key-value store on a ledger.

    Provides:
    - instantiate(): One-time setup hook
    - put(batch): Write a JSON batch of key -> hex value
    - get(key): Read one value as hex
    - getAll(): Read every pair as a JSON object
    - delete(key): Remove an existing key
    - keyExists(key): Check for a non-empty value

    The contract keeps no state of its own. Every call round-trips to
    ``ctx.ledger``; ordering, conflict detection and commit are left to
    the host.
    """

    DEFAULT_NAME = "ledgerkv.contract"
    VERSION = "0.1.0"

    def __init__(self, name: str = DEFAULT_NAME) -> None:
        self.name = name

    @transaction(intent=Intent.SUBMIT)
    def instantiate(self, ctx: TransactionContext) -> None:
        """Setup hook run once when the contract is instantiated or upgraded."""
        ctx.logger.info("No data migration to perform")

    @transaction(intent=Intent.SUBMIT)
    def put(self, ctx: TransactionContext, json_key_value_pairs: str) -> None:
        """
        Write a batch of key-value pairs to the ledger.

        Entries are written in document order. If a value fails to decode,
        the entries before it stay written; rolling those back is up to
        the host transaction.

        Args:
            ctx: The transaction context.
            json_key_value_pairs: JSON object of key to hex-encoded value.

        Raises:
            DecodingError: If the batch or one of its values cannot be decoded.
        """
        batch = decode_batch(json_key_value_pairs)
        for key, hex_value in batch.items():
            ctx.ledger.put(key, decode_hex(hex_value))
        ctx.logger.debug(f"Put {len(batch)} key(s)")

    @transaction(intent=Intent.EVALUATE)
    def get(self, ctx: TransactionContext, key: str) -> str:
        """
        Retrieve the value stored under a key.

        Args:
            ctx: The transaction context.
            key: Key of the pair.

        Returns:
            The stored value, hex encoded.

        Raises:
            NotFoundError: If the key is absent or its value is empty.
        """
        value = ctx.ledger.get(key)
        if not value:
            error = NotFoundError(key)
            ctx.logger.warning(error.message)
            raise error
        return encode_hex(value)

    @transaction(name="getAll", intent=Intent.EVALUATE)
    def get_all(self, ctx: TransactionContext) -> str:
        """
        Retrieve every key-value pair on the ledger.

        Keys are returned as stored, values hex encoded. The whole key
        space is scanned in one pass with no pagination.

        Returns:
            JSON object of key to hex value.
        """
        results: dict[str, str] = {}
        for entry in ctx.ledger.scan("", ""):
            results[entry.key] = encode_hex(entry.value)
        return encode_batch(results)

    @transaction(intent=Intent.SUBMIT)
    def delete(self, ctx: TransactionContext, key: str) -> None:
        """
        Delete a key-value pair from the ledger.

        Raises:
            NotFoundError: If the key does not exist.
        """
        if not self.key_exists(ctx, key):
            error = NotFoundError(key)
            ctx.logger.warning(error.message)
            raise error
        ctx.ledger.delete(key)

    @transaction(name="keyExists", intent=Intent.EVALUATE)
    def key_exists(self, ctx: TransactionContext, key: str) -> bool:
        """Return True if the key holds a non-empty value."""
        value = ctx.ledger.get(key)
        return value is not None and len(value) > 0

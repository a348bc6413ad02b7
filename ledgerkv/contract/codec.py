"""
Hex and JSON encoding used at the contract boundary.

Values travel as hex text and are stored as raw bytes. Batches travel as
a JSON object mapping key to hex value.
"""

import binascii
import json

from ledgerkv.models.exceptions import DecodingError


def encode_hex(data: bytes) -> str:
    """Encode raw bytes as lowercase hex."""
    return binascii.hexlify(data).decode("ascii")


def decode_hex(value: str) -> bytes:
    """
    Decode a hex string into raw bytes.

    Upper and lower case digits are accepted. Whitespace, odd lengths and
    non-hex characters are rejected.

    Args:
        value: The hex text to decode.

    Returns:
        The decoded bytes.

    Raises:
        DecodingError: If the value is not valid hex.
    """
    if not isinstance(value, str):
        raise DecodingError(
            f"Error decoding hex encoded value: expected a string, got {type(value).__name__}"
        )
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError) as e:
        raise DecodingError(f"Error decoding hex encoded value: {e}") from e


def _reject_duplicates(pairs: list[tuple[str, object]]) -> dict[str, object]:
    result: dict[str, object] = {}
    for key, value in pairs:
        if key in result:
            raise DecodingError(f"Duplicate key in batch: {key}")
        result[key] = value
    return result


def decode_batch(payload: str) -> dict[str, str]:
    """
    Parse a JSON batch of key to hex value.

    Values are checked to be strings but are not hex-decoded here, so a
    caller can decode and write them one at a time.

    Args:
        payload: JSON object text.

    Returns:
        Mapping of key to hex string, in document order.

    Raises:
        DecodingError: On malformed JSON, a non-object document,
            duplicate keys or non-string values.
    """
    try:
        batch = json.loads(payload, object_pairs_hook=_reject_duplicates)
    except json.JSONDecodeError as e:
        raise DecodingError(f"Error decoding batch: {e}") from e
    except TypeError as e:
        raise DecodingError(f"Error decoding batch: {e}") from e

    if not isinstance(batch, dict):
        raise DecodingError(
            f"Error decoding batch: expected a JSON object, got {type(batch).__name__}"
        )

    for key, value in batch.items():
        if not isinstance(value, str):
            raise DecodingError(
                f"Error decoding batch: value for key {key} is not a string"
            )
    return batch


def encode_batch(pairs: dict[str, str]) -> str:
    """Serialize a key to hex mapping as compact JSON."""
    return json.dumps(pairs, separators=(",", ":"))

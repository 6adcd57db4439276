"""Hex encoding helpers."""

import binascii


def to_hex(value) -> str:
    """Encode bytes as a 0x-prefixed hex string."""
    return "0x" + bytes(value).hex()


def decode_hex(value: str) -> bytes:
    """Decode a hex string, with or without a 0x prefix.

    Every character after the prefix must be a hex digit; whitespace is
    rejected.

    Raises:
        ValueError: If the value is not an even-length run of hex digits
    """
    if value.startswith("0x"):
        value = value[2:]
    return binascii.unhexlify(value)

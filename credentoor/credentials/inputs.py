"""Input validation, run before any key material is derived."""

import logging
from typing import Optional

from ..exceptions import (
    InputInvalidError,
    InvalidMnemonicError,
    MissingWithdrawalAddressError,
    WithdrawalAddressEncodingError,
    WithdrawalAddressLengthError,
    WithdrawalAddressPrefixError,
)
from ..keys import KeySource
from ..spec.constants import EXECUTION_ADDRESS_LENGTH, MIN_SEED_LENGTH
from ..utils import decode_hex

logger = logging.getLogger(__name__)


def parse_withdrawal_address(address: Optional[str]) -> bytes:
    """Decode a 0x-prefixed 20-byte execution address.

    Raises:
        MissingWithdrawalAddressError: If no address is given
        WithdrawalAddressPrefixError: If the 0x prefix is missing
        WithdrawalAddressEncodingError: If the body is not valid hex
        WithdrawalAddressLengthError: If the address is not 20 bytes
    """
    if not address:
        raise MissingWithdrawalAddressError()
    if not address.startswith("0x"):
        raise WithdrawalAddressPrefixError(address)
    try:
        decoded = decode_hex(address)
    except ValueError as e:
        raise WithdrawalAddressEncodingError(address, str(e)) from e
    if len(decoded) != EXECUTION_ADDRESS_LENGTH:
        raise WithdrawalAddressLengthError(address)
    return decoded


def check_mnemonic(key_source: KeySource, mnemonic: str) -> None:
    if not key_source.validate_mnemonic(mnemonic):
        raise InvalidMnemonicError()


def check_seed(seed: bytes) -> None:
    if len(seed) < MIN_SEED_LENGTH:
        raise InputInvalidError(f"seed must be at least {MIN_SEED_LENGTH} bytes, got {len(seed)}")


def check_key_material(key_source: KeySource, mnemonic: str, seed: bytes) -> None:
    """Check exactly one of mnemonic and seed is supplied, and that it is usable."""
    if mnemonic and seed:
        raise InputInvalidError("only one of mnemonic and seed may be supplied")
    if seed:
        check_seed(seed)
    elif mnemonic:
        check_mnemonic(key_source, mnemonic)
    else:
        raise InputInvalidError("no mnemonic or seed provided")

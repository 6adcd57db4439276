"""Beacon API JSON encoding of signed credential changes."""

import json
import logging
from pathlib import Path
from typing import Iterable, Union

from ..exceptions import InputInvalidError
from ..spec.constants import BLS_SIGNATURE_LENGTH
from ..spec.types import (
    BLSPubkey,
    BLSSignature,
    BLSToExecutionChange,
    ExecutionAddress,
    SignedBLSToExecutionChange,
)
from ..utils import decode_hex, to_hex

logger = logging.getLogger(__name__)

DEFAULT_CHANGES_FILE = "change-operations.json"


def _from_hex(value: str) -> bytes:
    if not value.startswith("0x"):
        raise ValueError(f"{value} does not contain a 0x prefix")
    return decode_hex(value)


def change_to_json(signed: SignedBLSToExecutionChange) -> dict:
    message = signed.message
    return {
        "message": {
            "validator_index": str(int(message.validator_index)),
            "from_bls_pubkey": to_hex(message.from_bls_pubkey),
            "to_execution_address": to_hex(message.to_execution_address),
        },
        "signature": to_hex(signed.signature),
    }


def change_from_json(data: dict) -> SignedBLSToExecutionChange:
    """Decode a signed change from its beacon API JSON form.

    Raises:
        InputInvalidError: If a field is missing or malformed
    """
    try:
        message = data["message"]
        signature = _from_hex(data["signature"])
        if len(signature) != BLS_SIGNATURE_LENGTH:
            raise ValueError(f"signature must be {BLS_SIGNATURE_LENGTH} bytes, got {len(signature)}")
        return SignedBLSToExecutionChange(
            message=BLSToExecutionChange(
                validator_index=int(message["validator_index"]),
                from_bls_pubkey=BLSPubkey(_from_hex(message["from_bls_pubkey"])),
                to_execution_address=ExecutionAddress(_from_hex(message["to_execution_address"])),
            ),
            signature=BLSSignature(signature),
        )
    except KeyError as e:
        raise InputInvalidError(f"signed change missing field {e.args[0]}") from e
    except (TypeError, ValueError) as e:
        raise InputInvalidError(f"invalid signed change: {e}") from e


def write_changes(changes: Iterable[SignedBLSToExecutionChange], path: Union[str, Path]) -> None:
    encoded = [change_to_json(c) for c in changes]
    with open(path, "w") as f:
        json.dump(encoded, f, indent=2)
    logger.info(f"Wrote {len(encoded)} credential change(s) to {path}")


def read_changes(path: Union[str, Path]) -> list[SignedBLSToExecutionChange]:
    """Read signed changes written by write_changes.

    A file holding a single change object is accepted as well as a list.
    """
    with open(path, "r") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = [data]
    return [change_from_json(entry) for entry in data]

"""Offline preparation file: a chain snapshot saved as JSON.

Lets changes be generated on a machine with no beacon node access. Format:

    {
      "version": "1",
      "genesis_validators_root": "0x...",
      "epoch": "123",
      "genesis_fork_version": "0x00000000",
      "current_fork_version": "0x04000000",
      "validators": [
        {"index": "0", "pubkey": "0x...", "state": "active_ongoing",
         "withdrawal_credentials": "0x..."}
      ]
    }
"""

import json
import logging
from pathlib import Path
from typing import Union

from ..utils import decode_hex, to_hex
from .exceptions import SnapshotFileError
from .types import ChainSnapshot, ValidatorRecord

logger = logging.getLogger(__name__)

SNAPSHOT_FILE_VERSION = "1"
DEFAULT_SNAPSHOT_FILE = "offline-preparation.json"


def _from_hex(path: str, name: str, value) -> bytes:
    if not isinstance(value, str) or not value.startswith("0x"):
        raise SnapshotFileError(path, f"{name} must be a 0x-prefixed hex string")
    try:
        return decode_hex(value)
    except ValueError as e:
        raise SnapshotFileError(path, f"{name}: {e}") from e


def snapshot_to_dict(snapshot: ChainSnapshot) -> dict:
    data = {
        "version": SNAPSHOT_FILE_VERSION,
        "genesis_validators_root": to_hex(snapshot.genesis_validators_root),
        "epoch": str(snapshot.epoch),
        "current_fork_version": to_hex(snapshot.current_fork_version),
        "validators": [
            {
                "index": str(v.index),
                "pubkey": to_hex(v.pubkey),
                "state": v.state,
                "withdrawal_credentials": to_hex(v.withdrawal_credentials),
            }
            for v in snapshot.validators
        ],
    }
    if snapshot.genesis_fork_version is not None:
        data["genesis_fork_version"] = to_hex(snapshot.genesis_fork_version)
    return data


def snapshot_from_dict(data: dict, path: str = "<snapshot>") -> ChainSnapshot:
    """Build a ChainSnapshot from decoded JSON.

    Raises:
        SnapshotFileError: If a field is missing or malformed
    """
    version = data.get("version")
    if version != SNAPSHOT_FILE_VERSION:
        raise SnapshotFileError(path, f"unsupported version {version!r}")

    try:
        validators = []
        for i, entry in enumerate(data["validators"]):
            validators.append(
                ValidatorRecord(
                    index=int(entry["index"]),
                    pubkey=_from_hex(path, f"validators[{i}].pubkey", entry["pubkey"]),
                    withdrawal_credentials=_from_hex(
                        path,
                        f"validators[{i}].withdrawal_credentials",
                        entry["withdrawal_credentials"],
                    ),
                    state=entry.get("state", ""),
                )
            )
        genesis_fork_version = None
        if "genesis_fork_version" in data:
            genesis_fork_version = _from_hex(path, "genesis_fork_version", data["genesis_fork_version"])
        return ChainSnapshot(
            validators=tuple(validators),
            genesis_validators_root=_from_hex(
                path, "genesis_validators_root", data["genesis_validators_root"]
            ),
            current_fork_version=_from_hex(path, "current_fork_version", data["current_fork_version"]),
            epoch=int(data.get("epoch", 0)),
            genesis_fork_version=genesis_fork_version,
        )
    except KeyError as e:
        raise SnapshotFileError(path, f"missing field {e.args[0]}") from e
    except ValueError as e:
        raise SnapshotFileError(path, str(e)) from e


def save_snapshot(snapshot: ChainSnapshot, path: Union[str, Path]) -> None:
    """Write a snapshot to an offline preparation file."""
    with open(path, "w") as f:
        json.dump(snapshot_to_dict(snapshot), f, indent=2)
    logger.info(f"Saved {len(snapshot.validators)} validators to {path}")


def load_snapshot(path: Union[str, Path]) -> ChainSnapshot:
    """Read a snapshot from an offline preparation file.

    Raises:
        SnapshotFileError: If the file cannot be read or parsed
    """
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except OSError as e:
        raise SnapshotFileError(str(path), f"cannot read file: {e.strerror}") from e
    except json.JSONDecodeError as e:
        raise SnapshotFileError(str(path), f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotFileError(str(path), "expected a JSON object")

    snapshot = snapshot_from_dict(data, str(path))
    logger.info(f"Loaded {len(snapshot.validators)} validators from {path}")
    return snapshot

"""Chain information: validator snapshots from a beacon node or an offline file."""

from .exceptions import BeaconAPIError, SnapshotFileError, StateNotFoundError
from .types import ChainSnapshot, ValidatorRecord
from .client import BeaconClient, fetch_chain_snapshot, validator_record_from_api
from .snapshot_file import load_snapshot, save_snapshot

__all__ = [
    "BeaconAPIError",
    "BeaconClient",
    "ChainSnapshot",
    "SnapshotFileError",
    "StateNotFoundError",
    "ValidatorRecord",
    "fetch_chain_snapshot",
    "load_snapshot",
    "save_snapshot",
    "validator_record_from_api",
]

"""Beacon API client for reading validators and submitting credential changes."""

import logging
import time
from typing import Optional

import aiohttp

from ..utils import decode_hex
from .exceptions import BeaconAPIError, StateNotFoundError
from .types import ChainSnapshot, ValidatorRecord

logger = logging.getLogger(__name__)


class BeaconClient:
    """Client for a remote Beacon API (any conformant client)."""

    def __init__(self, base_url: str, timeout: float = 60.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self._session

    async def _get_data(self, path: str, not_found: Optional[str] = None):
        session = await self._ensure_session()
        url = f"{self.base_url}{path}"

        async with session.get(url, headers={"Accept": "application/json"}) as response:
            if response.status == 404 and not_found:
                raise StateNotFoundError(not_found)
            if response.status != 200:
                text = await response.text()
                raise BeaconAPIError(response.status, text)
            data = await response.json()
            return data.get("data", {})

    async def get_genesis(self) -> dict:
        """Get genesis information."""
        return await self._get_data("/eth/v1/beacon/genesis")

    async def get_fork(self, state_id: str = "head") -> dict:
        """Get fork information for a state."""
        return await self._get_data(
            f"/eth/v1/beacon/states/{state_id}/fork",
            not_found=f"State not found: {state_id}",
        )

    async def get_validators(self, state_id: str = "head") -> list[dict]:
        """Get all validators for a state."""
        return await self._get_data(
            f"/eth/v1/beacon/states/{state_id}/validators",
            not_found=f"State not found: {state_id}",
        )

    async def get_spec(self) -> dict:
        """Get the chain spec/config."""
        return await self._get_data("/eth/v1/config/spec")

    async def submit_bls_to_execution_changes(self, changes: list[dict]) -> None:
        """Submit signed BLS to execution changes to the node's operation pool."""
        session = await self._ensure_session()
        url = f"{self.base_url}/eth/v1/beacon/pool/bls_to_execution_changes"

        async with session.post(url, json=changes) as response:
            if response.status != 200:
                text = await response.text()
                raise BeaconAPIError(response.status, text)
        logger.info(f"Submitted {len(changes)} credential change(s) to {self.base_url}")

    async def close(self) -> None:
        """Close the client and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None


def validator_record_from_api(entry: dict) -> ValidatorRecord:
    """Build a ValidatorRecord from a beacon API validator entry."""
    validator = entry["validator"]
    return ValidatorRecord(
        index=int(entry["index"]),
        pubkey=decode_hex(validator["pubkey"]),
        withdrawal_credentials=decode_hex(validator["withdrawal_credentials"]),
        state=entry.get("status", ""),
    )


def current_epoch(genesis_time: int, seconds_per_slot: int, slots_per_epoch: int,
                  now: Optional[float] = None) -> int:
    """Epoch at wall-clock time now (defaults to the current time)."""
    if now is None:
        now = time.time()
    if now < genesis_time:
        return 0
    return int(now - genesis_time) // (seconds_per_slot * slots_per_epoch)


async def fetch_chain_snapshot(
    client: BeaconClient,
    state_id: str = "head",
    now: Optional[float] = None,
) -> ChainSnapshot:
    """Fetch everything needed to build credential changes from a beacon node."""
    genesis = await client.get_genesis()
    fork = await client.get_fork(state_id)
    spec = await client.get_spec()
    entries = await client.get_validators(state_id)

    validators = tuple(
        sorted((validator_record_from_api(e) for e in entries), key=lambda v: v.index)
    )
    logger.info(f"Obtained {len(validators)} validators from {client.base_url}")

    epoch = current_epoch(
        int(genesis["genesis_time"]),
        int(spec["SECONDS_PER_SLOT"]),
        int(spec["SLOTS_PER_EPOCH"]),
        now,
    )

    return ChainSnapshot(
        validators=validators,
        genesis_validators_root=decode_hex(genesis["genesis_validators_root"]),
        current_fork_version=decode_hex(fork["current_version"]),
        epoch=epoch,
        genesis_fork_version=decode_hex(genesis["genesis_fork_version"]),
    )

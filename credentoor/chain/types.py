"""Chain snapshot data types."""

from dataclasses import dataclass, field
from typing import Optional

from ..spec.constants import (
    BLS_PUBKEY_LENGTH,
    GENESIS_FORK_VERSION,
    WITHDRAWAL_CREDENTIALS_LENGTH,
)


@dataclass(frozen=True)
class ValidatorRecord:
    """A validator as recorded on chain."""

    index: int
    pubkey: bytes
    withdrawal_credentials: bytes
    state: str = ""

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"Validator index must be non-negative, got {self.index}")
        if len(self.pubkey) != BLS_PUBKEY_LENGTH:
            raise ValueError(
                f"Validator {self.index} pubkey must be {BLS_PUBKEY_LENGTH} bytes, "
                f"got {len(self.pubkey)}"
            )
        if len(self.withdrawal_credentials) != WITHDRAWAL_CREDENTIALS_LENGTH:
            raise ValueError(
                f"Validator {self.index} withdrawal credentials must be "
                f"{WITHDRAWAL_CREDENTIALS_LENGTH} bytes, got {len(self.withdrawal_credentials)}"
            )

    @property
    def credentials_prefix(self) -> int:
        return self.withdrawal_credentials[0]


@dataclass(frozen=True)
class ChainSnapshot:
    """Read-only view of the chain needed to build credential changes."""

    validators: tuple[ValidatorRecord, ...]
    genesis_validators_root: bytes = b"\x00" * 32
    current_fork_version: bytes = GENESIS_FORK_VERSION
    epoch: int = 0
    genesis_fork_version: Optional[bytes] = None
    _by_index: dict = field(default_factory=dict, init=False, repr=False, compare=False)
    _by_pubkey: dict = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "validators", tuple(self.validators))
        for validator in self.validators:
            if validator.index in self._by_index:
                raise ValueError(f"Duplicate validator index {validator.index}")
            self._by_index[validator.index] = validator
            self._by_pubkey[validator.pubkey] = validator

    @property
    def signing_fork_version(self) -> bytes:
        """Fork version used for the BLS to execution change domain.

        Changes are signed with the genesis fork version so they stay valid
        across forks; snapshots without one fall back to the current version.
        """
        if self.genesis_fork_version is not None:
            return self.genesis_fork_version
        return self.current_fork_version

    def by_index(self, index: int) -> Optional[ValidatorRecord]:
        return self._by_index.get(index)

    def by_pubkey(self, pubkey: bytes) -> Optional[ValidatorRecord]:
        return self._by_pubkey.get(pubkey)

    def pubkey_map(self) -> dict[bytes, ValidatorRecord]:
        return dict(self._by_pubkey)

    def indices(self) -> list[int]:
        return sorted(self._by_index)

"""Generation of signed BLS to execution changes.

A request moves through validation, path resolution, key derivation,
validator matching and message building. Validation errors are raised before
any key is derived. Validators that cannot be found, or that already have
execution credentials, produce nothing rather than an error when scanning.
"""

import logging
import threading
from typing import Mapping, Optional

from ..chain.types import ChainSnapshot, ValidatorRecord
from ..exceptions import (
    InputInvalidError,
    NoSelectorError,
    UnknownValidatorError,
)
from ..keys import DerivedKey, KeySource
from ..spec.constants import DEFAULT_MAX_DISTANCE
from ..spec.types import SignedBLSToExecutionChange
from .builder import build_signed_change, change_domain
from .inputs import check_key_material, parse_withdrawal_address
from .matcher import Match, MatchOutcome, classify, match_validator, verify_withdrawal_credentials
from .paths import (
    PathSelector,
    ScanSelector,
    check_validator_path,
    parse_validator,
    resolve,
    select,
    withdrawal_path,
)
from .types import Batch, ChangeRequest

logger = logging.getLogger(__name__)


def _ordered(changes: list[SignedBLSToExecutionChange]) -> Batch:
    return tuple(sorted(changes, key=lambda c: int(c.message.validator_index)))


def validate_request(key_source: KeySource, request: ChangeRequest) -> None:
    """Run the request checks that need no chain data.

    Lets callers reject bad input before fetching the validator set.

    Raises:
        InputInvalidError: If an input is malformed
        PathInvalidError: If an explicit path is malformed
    """
    selector = select(request)
    if isinstance(selector, PathSelector):
        check_validator_path(selector.path)
    if request.mnemonic or request.seed or not request.private_key:
        check_key_material(key_source, request.mnemonic, request.seed)
    parse_withdrawal_address(request.withdrawal_address)
    if request.private_key:
        key_source.key_from_private_key_hex(request.private_key)


class ChangeGenerator:
    """Generates signed credential changes against a chain snapshot.

    Each call returns a new batch; the generator holds no per-call state.
    Changes are signed under domain, which defaults to the chain's BLS to
    execution change domain.
    """

    def __init__(
        self,
        key_source: KeySource,
        chain: ChainSnapshot,
        max_distance: int = DEFAULT_MAX_DISTANCE,
        domain: Optional[bytes] = None,
    ):
        self.key_source = key_source
        self.chain = chain
        self.max_distance = max_distance
        self.domain = change_domain(chain) if domain is None else domain

    def generate(self, request: ChangeRequest, cancel: Optional[threading.Event] = None) -> Batch:
        """Generate changes for whatever the request selects."""
        selector = select(request)
        if isinstance(selector, PathSelector):
            return self.from_mnemonic_and_path(request)
        if isinstance(selector, ScanSelector):
            return self.from_mnemonic(request, cancel)
        if not request.mnemonic and not request.seed and request.private_key:
            return self.from_private_key(request)
        return self.from_mnemonic_and_validator(request)

    def from_mnemonic_and_path(self, request: ChangeRequest) -> Batch:
        """Generate the change for the validator at one explicit path.

        Raises:
            UnknownValidatorError: If the key at the path is not a known validator
        """
        check_key_material(self.key_source, request.mnemonic, request.seed)
        if not request.path:
            raise NoSelectorError("no validator path provided")
        check_validator_path(request.path)
        address = parse_withdrawal_address(request.withdrawal_address)
        override = self._private_key(request)

        seed = self._seed(request)
        match, change = self._generate_at_path(
            seed, request.path, address, self.chain.pubkey_map(), override
        )
        if match.outcome is MatchOutcome.UNKNOWN:
            raise UnknownValidatorError(f"no known validator at path {request.path}")
        return _ordered([change] if change is not None else [])

    def from_mnemonic_and_validator(self, request: ChangeRequest) -> Batch:
        """Generate the change for one named validator.

        The mnemonic's accounts are searched for the validator's signing key,
        starting with the account equal to its index.

        Raises:
            UnknownValidatorError: If the validator is unknown, cannot change
                or is not found within max_distance accounts
        """
        check_key_material(self.key_source, request.mnemonic, request.seed)
        if not request.validator:
            raise NoSelectorError("no validator specified")
        address = parse_withdrawal_address(request.withdrawal_address)
        override = self._private_key(request)
        resolution = resolve(parse_validator(request.validator), self.chain, self.max_distance)
        target = resolution.target

        if not self._can_change(target):
            return ()

        seed = self._seed(request)
        for path in resolution.paths:
            _, change = self._generate_at_path(seed, path, address, resolution.candidates, override)
            if change is not None:
                return (change,)

        raise UnknownValidatorError(
            f"validator {target.index} not found within {self.max_distance} accounts"
        )

    def from_mnemonic(self, request: ChangeRequest, cancel: Optional[threading.Event] = None) -> Batch:
        """Generate changes for every validator the mnemonic or seed controls.

        One path is tried per validator index in the snapshot. Paths whose key
        matches no eligible validator are skipped. Any other error aborts the
        whole batch. If cancel is set between paths, the changes generated so
        far are returned.
        """
        check_key_material(self.key_source, request.mnemonic, request.seed)
        if request.private_key:
            raise InputInvalidError("a private key can only be used with a single validator")
        address = parse_withdrawal_address(request.withdrawal_address)
        resolution = resolve(ScanSelector(), self.chain, self.max_distance)

        seed = self._seed(request)
        changes = []
        for path in resolution.paths:
            if cancel is not None and cancel.is_set():
                logger.info(f"Scan cancelled after {len(changes)} change(s)")
                break
            _, change = self._generate_at_path(seed, path, address, resolution.candidates)
            if change is not None:
                changes.append(change)

        logger.info(f"Generated {len(changes)} credential change(s) from {len(resolution.paths)} path(s)")
        return _ordered(changes)

    def from_private_key(self, request: ChangeRequest) -> Batch:
        """Generate the change for one named validator from its withdrawal private key."""
        if not request.validator:
            raise NoSelectorError("no validator specified")
        if not request.private_key:
            raise InputInvalidError("no private key provided")
        address = parse_withdrawal_address(request.withdrawal_address)
        withdrawal_key = self.key_source.key_from_private_key_hex(request.private_key)
        target = resolve(parse_validator(request.validator), self.chain, 0).target

        if not self._can_change(target):
            return ()
        verify_withdrawal_credentials(target, withdrawal_key.pubkey)
        return (build_signed_change(self.key_source, self.domain, target, withdrawal_key, address),)

    def from_seed_and_path(
        self,
        seed: bytes,
        path: str,
        address: bytes,
        withdrawal_key: Optional[DerivedKey] = None,
    ) -> Optional[SignedBLSToExecutionChange]:
        """Generate the change for the validator whose key is at path.

        Returns:
            The signed change, or None if the key at path is not an eligible
            validator

        Raises:
            PathInvalidError: If the path is malformed
            CredentialsMismatchError: If the withdrawal key does not own the validator
        """
        _, change = self._generate_at_path(seed, path, address, self.chain.pubkey_map(), withdrawal_key)
        return change

    def _generate_at_path(
        self,
        seed: bytes,
        path: str,
        address: bytes,
        candidates: Mapping[bytes, ValidatorRecord],
        withdrawal_key: Optional[DerivedKey] = None,
    ) -> tuple[Match, Optional[SignedBLSToExecutionChange]]:
        validator_key = self.key_source.derive_key(seed, path)
        match = match_validator(validator_key.pubkey, candidates, path)
        if not match.eligible:
            return match, None

        if withdrawal_key is None:
            withdrawal_key = self.key_source.derive_key(seed, withdrawal_path(path))
        verify_withdrawal_credentials(match.record, withdrawal_key.pubkey)

        change = build_signed_change(self.key_source, self.domain, match.record, withdrawal_key, address)
        logger.info(f"Generated credential change for validator {match.record.index} at path {path}")
        return match, change

    def _can_change(self, record: ValidatorRecord) -> bool:
        outcome = classify(record)
        if outcome is MatchOutcome.ALREADY_MIGRATED:
            logger.info(f"Validator {record.index} already has execution withdrawal credentials")
            return False
        if outcome is MatchOutcome.UNSUPPORTED:
            raise UnknownValidatorError(
                f"validator {record.index} has unsupported withdrawal credentials "
                f"0x{record.withdrawal_credentials.hex()}"
            )
        return True

    def _private_key(self, request: ChangeRequest) -> Optional[DerivedKey]:
        if not request.private_key:
            return None
        return self.key_source.key_from_private_key_hex(request.private_key)

    def _seed(self, request: ChangeRequest) -> bytes:
        if request.seed:
            return request.seed
        return self.key_source.seed_from_mnemonic(request.mnemonic)

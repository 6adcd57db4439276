"""Matching derived keys to chain validators.

Reference: https://github.com/ethereum/consensus-specs/blob/master/specs/capella/beacon-chain.md
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from ..chain.types import ValidatorRecord
from ..crypto import sha256
from ..exceptions import CredentialsMismatchError
from ..spec.constants import BLS_WITHDRAWAL_PREFIX, ETH1_ADDRESS_WITHDRAWAL_PREFIX

logger = logging.getLogger(__name__)


class MatchOutcome(str, Enum):
    ELIGIBLE = "eligible"
    UNKNOWN = "unknown"
    ALREADY_MIGRATED = "already_migrated"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class Match:
    outcome: MatchOutcome
    record: Optional[ValidatorRecord] = None

    @property
    def eligible(self) -> bool:
        return self.outcome is MatchOutcome.ELIGIBLE


def classify(record: ValidatorRecord) -> MatchOutcome:
    """Classify a validator by its withdrawal credential prefix."""
    prefix = record.credentials_prefix
    if prefix == BLS_WITHDRAWAL_PREFIX:
        return MatchOutcome.ELIGIBLE
    if prefix == ETH1_ADDRESS_WITHDRAWAL_PREFIX:
        return MatchOutcome.ALREADY_MIGRATED
    return MatchOutcome.UNSUPPORTED


def match_validator(
    pubkey: bytes,
    candidates: Mapping[bytes, ValidatorRecord],
    path: str = "",
) -> Match:
    """Find the validator whose signing key is pubkey and check it can change."""
    record = candidates.get(pubkey)
    if record is None:
        logger.debug(f"No validator found with public key 0x{pubkey.hex()} at path {path}")
        return Match(MatchOutcome.UNKNOWN)

    logger.debug(f"Validator {record.index} found with public key 0x{pubkey.hex()} at path {path}")
    outcome = classify(record)
    if outcome is MatchOutcome.ALREADY_MIGRATED:
        logger.info(f"Validator {record.index} already has execution withdrawal credentials")
    elif outcome is MatchOutcome.UNSUPPORTED:
        logger.warning(
            f"Validator {record.index} has unsupported withdrawal credentials "
            f"0x{record.withdrawal_credentials.hex()}"
        )
    return Match(outcome, record)


def expected_withdrawal_credentials(withdrawal_pubkey: bytes) -> bytes:
    """BLS withdrawal credentials: BLS_WITHDRAWAL_PREFIX || sha256(pubkey)[1:]."""
    return bytes([BLS_WITHDRAWAL_PREFIX]) + sha256(withdrawal_pubkey)[1:]


def verify_withdrawal_credentials(record: ValidatorRecord, withdrawal_pubkey: bytes) -> None:
    """Check the withdrawal key is the one committed to by the validator.

    Raises:
        CredentialsMismatchError: If the credentials do not match
    """
    if expected_withdrawal_credentials(withdrawal_pubkey) != record.withdrawal_credentials:
        raise CredentialsMismatchError(record.pubkey, record.withdrawal_credentials)

"""Building and signing BLS to execution changes."""

import logging

from ..chain.types import ChainSnapshot, ValidatorRecord
from ..keys import DerivedKey, KeySource
from ..spec.constants import DOMAIN_BLS_TO_EXECUTION_CHANGE
from ..spec.domain import compute_domain
from ..spec.types import (
    BLSPubkey,
    BLSSignature,
    BLSToExecutionChange,
    ExecutionAddress,
    SignedBLSToExecutionChange,
)

logger = logging.getLogger(__name__)


def change_domain(chain: ChainSnapshot) -> bytes:
    """Signing domain for BLS to execution changes on this chain."""
    return compute_domain(
        DOMAIN_BLS_TO_EXECUTION_CHANGE,
        chain.signing_fork_version,
        chain.genesis_validators_root,
    )


def build_change(
    record: ValidatorRecord,
    withdrawal_pubkey: bytes,
    address: bytes,
) -> BLSToExecutionChange:
    return BLSToExecutionChange(
        validator_index=record.index,
        from_bls_pubkey=BLSPubkey(withdrawal_pubkey),
        to_execution_address=ExecutionAddress(address),
    )


def build_signed_change(
    key_source: KeySource,
    domain: bytes,
    record: ValidatorRecord,
    withdrawal_key: DerivedKey,
    address: bytes,
) -> SignedBLSToExecutionChange:
    """Build and sign the change for one eligible validator under domain.

    The caller must have verified withdrawal_key against the validator's
    withdrawal credentials.

    Raises:
        SigningFailedError: If signing fails
    """
    change = build_change(record, withdrawal_key.pubkey, address)
    signature = key_source.sign(
        withdrawal_key.privkey,
        bytes(change.hash_tree_root()),
        domain,
    )
    logger.debug(f"Signed credential change for validator {record.index}")
    return SignedBLSToExecutionChange(
        message=change,
        signature=BLSSignature(signature),
    )

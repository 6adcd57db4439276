"""Tests for building and signing credential changes."""

from credentoor.chain import ChainSnapshot
from credentoor.credentials.builder import build_change, build_signed_change, change_domain
from credentoor.crypto import verify
from credentoor.spec import compute_domain, compute_signing_root, constants
from credentoor.spec.constants import DOMAIN_BLS_TO_EXECUTION_CHANGE

from conftest import (
    CURRENT_FORK_VERSION,
    GENESIS_FORK_VERSION,
    GENESIS_VALIDATORS_ROOT,
    VALIDATOR_3_PRIVATE_KEY,
    VALIDATOR_3_WITHDRAWAL_PUBKEY,
    WITHDRAWAL_ADDRESS,
    make_snapshot,
)

ADDRESS = bytes.fromhex(WITHDRAWAL_ADDRESS[2:])


def test_change_domain_uses_genesis_fork_version(snapshot):
    domain = change_domain(snapshot)
    assert domain[:4] == DOMAIN_BLS_TO_EXECUTION_CHANGE
    assert len(domain) == 32
    assert domain == compute_domain(DOMAIN_BLS_TO_EXECUTION_CHANGE, GENESIS_FORK_VERSION, GENESIS_VALIDATORS_ROOT)


def test_change_domain_falls_back_to_current_fork_version(validator_0):
    snapshot = make_snapshot(validator_0)
    without_genesis = type(snapshot)(
        validators=snapshot.validators,
        genesis_validators_root=GENESIS_VALIDATORS_ROOT,
        current_fork_version=CURRENT_FORK_VERSION,
    )
    assert change_domain(without_genesis) == compute_domain(
        DOMAIN_BLS_TO_EXECUTION_CHANGE, CURRENT_FORK_VERSION, GENESIS_VALIDATORS_ROOT
    )
    assert change_domain(without_genesis) != change_domain(snapshot)


def test_change_domain_of_empty_snapshot():
    snapshot = ChainSnapshot(validators=())
    assert snapshot.current_fork_version == constants.GENESIS_FORK_VERSION
    assert change_domain(snapshot) == compute_domain(
        DOMAIN_BLS_TO_EXECUTION_CHANGE, constants.GENESIS_FORK_VERSION, b"\x00" * 32
    )


def test_build_change(validator_3):
    change = build_change(validator_3, VALIDATOR_3_WITHDRAWAL_PUBKEY, ADDRESS)
    assert int(change.validator_index) == 3
    assert bytes(change.from_bls_pubkey) == VALIDATOR_3_WITHDRAWAL_PUBKEY
    assert bytes(change.to_execution_address) == ADDRESS


def test_build_signed_change(key_source, snapshot, validator_3):
    withdrawal_key = key_source.key_from_private_key_hex(VALIDATOR_3_PRIVATE_KEY)
    signed = build_signed_change(key_source, change_domain(snapshot), validator_3, withdrawal_key, ADDRESS)

    assert int(signed.message.validator_index) == 3
    signing_root = compute_signing_root(signed.message, change_domain(snapshot))
    assert verify(VALIDATOR_3_WITHDRAWAL_PUBKEY, signing_root, bytes(signed.signature))

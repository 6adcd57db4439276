"""Tests for beacon API JSON export of signed changes."""

import json

import pytest

from credentoor.chain import ValidatorRecord
from credentoor.credentials import change_from_json, change_to_json, read_changes, write_changes
from credentoor.credentials.builder import build_signed_change, change_domain
from credentoor.exceptions import InputInvalidError

from conftest import (
    VALIDATOR_3_CREDENTIALS,
    VALIDATOR_3_PRIVATE_KEY,
    VALIDATOR_3_PUBKEY,
    VALIDATOR_3_WITHDRAWAL_PUBKEY,
    WITHDRAWAL_ADDRESS,
    make_snapshot,
)


@pytest.fixture(scope="module")
def signed_change(key_source):
    record = ValidatorRecord(3, VALIDATOR_3_PUBKEY, VALIDATOR_3_CREDENTIALS)
    withdrawal_key = key_source.key_from_private_key_hex(VALIDATOR_3_PRIVATE_KEY)
    address = bytes.fromhex(WITHDRAWAL_ADDRESS[2:])
    domain = change_domain(make_snapshot(record))
    return build_signed_change(key_source, domain, record, withdrawal_key, address)


def test_change_to_json(signed_change):
    data = change_to_json(signed_change)
    assert data["message"] == {
        "validator_index": "3",
        "from_bls_pubkey": "0x" + VALIDATOR_3_WITHDRAWAL_PUBKEY.hex(),
        "to_execution_address": WITHDRAWAL_ADDRESS.lower(),
    }
    assert data["signature"].startswith("0x")
    assert len(data["signature"]) == 2 + 96 * 2


def test_change_from_json(signed_change):
    decoded = change_from_json(change_to_json(signed_change))
    assert decoded.hash_tree_root() == signed_change.hash_tree_root()


def test_write_and_read(tmp_path, signed_change):
    path = tmp_path / "change-operations.json"
    write_changes([signed_change, signed_change], path)

    assert len(json.loads(path.read_text())) == 2
    changes = read_changes(path)
    assert [int(c.message.validator_index) for c in changes] == [3, 3]


def test_read_single_object(tmp_path, signed_change):
    path = tmp_path / "change.json"
    path.write_text(json.dumps(change_to_json(signed_change)))
    assert len(read_changes(path)) == 1


def test_missing_field(signed_change):
    data = change_to_json(signed_change)
    del data["signature"]
    with pytest.raises(InputInvalidError, match="missing field signature"):
        change_from_json(data)


def test_unprefixed_hex(signed_change):
    data = change_to_json(signed_change)
    data["message"]["to_execution_address"] = WITHDRAWAL_ADDRESS[2:]
    with pytest.raises(InputInvalidError, match="does not contain a 0x prefix"):
        change_from_json(data)


def test_short_signature(signed_change):
    data = change_to_json(signed_change)
    data["signature"] = data["signature"][:-2]
    with pytest.raises(InputInvalidError, match="signature must be 96 bytes, got 95"):
        change_from_json(data)


def test_whitespace_in_hex(signed_change):
    data = change_to_json(signed_change)
    data["message"]["from_bls_pubkey"] = data["message"]["from_bls_pubkey"] + "\n"
    with pytest.raises(InputInvalidError):
        change_from_json(data)

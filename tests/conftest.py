"""Shared fixtures for credentoor tests.

Vectors use the mnemonic "abandon" x23 + "art" and validators whose keys sit
at known EIP-2334 paths of that mnemonic.
"""

import pytest

from credentoor.chain import ChainSnapshot, ValidatorRecord
from credentoor.keys import BLSKeySource


MNEMONIC = " ".join(["abandon"] * 23 + ["art"])
SEED = bytes.fromhex(
    "408b285c123836004f4b8842c89324c1f01382450c0d439af345ba7fc49acf70"
    "5489c6fc77dbd4e3dc1dd8cc6bc9f043db8ada1e243c4a0eafb290d399480840"
)
WITHDRAWAL_ADDRESS = "0x8c1Ff978036F2e9d7CC382Eff7B4c8c53C22ac15"

GENESIS_VALIDATORS_ROOT = bytes.fromhex(
    "4b363db94e286120d76eb905340fdd4e54bfe9f06bf33ff6cf5ad27f511bfe95"
)
GENESIS_FORK_VERSION = bytes.fromhex("00000000")
CURRENT_FORK_VERSION = bytes.fromhex("03000000")

VALIDATOR_0_PUBKEY = bytes.fromhex(
    "b384f767d964e100c8a9b21018d08c25ffebae268b3ab6d610353897541971726dbfc3c7463884c68a531515aab94c87"
)
VALIDATOR_0_CREDENTIALS = bytes.fromhex(
    "008ba1cc4b091b91c1202bba3f508075d6ff565c77e559f0803c0792e0302bf1"
)
VALIDATOR_0_WITHDRAWAL_PUBKEY = bytes.fromhex(
    "99b1f1d84d76185466d86c34bde1101316afddae76217aa86cd066979b19858c2c9d9e56eebc1e067ac54277a61790db"
)

VALIDATOR_2_PUBKEY = bytes.fromhex(
    "af9ce44f50148db412194af0baf0bab36bd5c3e0c4938911a4e502e398b59e5cca7c78e3fe034195478879eeb23db0a6"
)
VALIDATOR_2_CREDENTIALS = bytes.fromhex(
    "010000000000000f00000000931a2b72692906e6b12ce4643975e32b517691f2"
)

VALIDATOR_3_PUBKEY = bytes.fromhex(
    "86d330af51fa593fa9f93edb9d16640186be2e93ea94d259781e1eb34deb844c3968d75ea91d19f159dbd0523c6c5ba5"
)
VALIDATOR_3_CREDENTIALS = bytes.fromhex(
    "008168456b6d9a3283931fea5210da122d1e65e8ed50b8e8f5911183b02fd125"
)
VALIDATOR_3_PRIVATE_KEY = "0x67775f030068b4610d6e1bd04948f547305b2502423fcece4c1091d065b44638"
VALIDATOR_3_WITHDRAWAL_PUBKEY = bytes.fromhex(
    "86710abb44b6cda666577bbb255e16d98bf2525176223f3535c7dff8e70b3bc892bb361133952b03d2b078cd0718caf3"
)

# A validator no key of the test mnemonic controls.
STRANGER_PUBKEY = bytes.fromhex("aa" * 48)
STRANGER_CREDENTIALS = bytes.fromhex("00" + "bb" * 31)


def make_snapshot(*validators: ValidatorRecord) -> ChainSnapshot:
    return ChainSnapshot(
        validators=tuple(validators),
        genesis_validators_root=GENESIS_VALIDATORS_ROOT,
        current_fork_version=CURRENT_FORK_VERSION,
        epoch=194048,
        genesis_fork_version=GENESIS_FORK_VERSION,
    )


@pytest.fixture(scope="session")
def key_source():
    source = BLSKeySource()
    source.initialize()
    return source


@pytest.fixture
def validator_0():
    return ValidatorRecord(0, VALIDATOR_0_PUBKEY, VALIDATOR_0_CREDENTIALS, "active_ongoing")


@pytest.fixture
def validator_2():
    return ValidatorRecord(2, VALIDATOR_2_PUBKEY, VALIDATOR_2_CREDENTIALS, "active_ongoing")


@pytest.fixture
def validator_3():
    return ValidatorRecord(3, VALIDATOR_3_PUBKEY, VALIDATOR_3_CREDENTIALS, "active_ongoing")


@pytest.fixture
def stranger():
    return ValidatorRecord(5, STRANGER_PUBKEY, STRANGER_CREDENTIALS, "pending_queued")


@pytest.fixture
def snapshot(validator_0, validator_2, validator_3, stranger):
    return make_snapshot(validator_0, validator_2, validator_3, stranger)


class CountingKeySource:
    """Wraps a key source and counts seed and key derivations."""

    def __init__(self, inner):
        self.inner = inner
        self.seeds = 0
        self.derivations = 0

    def validate_mnemonic(self, phrase):
        return self.inner.validate_mnemonic(phrase)

    def seed_from_mnemonic(self, phrase):
        self.seeds += 1
        return self.inner.seed_from_mnemonic(phrase)

    def derive_key(self, seed, path):
        self.derivations += 1
        return self.inner.derive_key(seed, path)

    def key_from_private_key_hex(self, value):
        return self.inner.key_from_private_key_hex(value)

    def sign(self, privkey, message_root, domain):
        return self.inner.sign(privkey, message_root, domain)


@pytest.fixture
def counting_key_source(key_source):
    return CountingKeySource(key_source)

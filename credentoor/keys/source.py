"""BLS key source backed by BIP-39 mnemonics and EIP-2333 derivation."""

import logging
from typing import Optional, Protocol

from mnemonic import Mnemonic

from ..crypto import is_valid_privkey, pubkey_from_privkey, sign
from ..crypto.derivation import derive_sk_at_indices
from ..exceptions import (
    DerivationFailedError,
    InvalidPrivateKeyError,
    PathInvalidError,
    SigningFailedError,
)
from ..spec.domain import compute_signing_root
from ..utils import decode_hex
from .types import DerivedKey

logger = logging.getLogger(__name__)


class KeySource(Protocol):
    """Capability the credential change generator needs for key material."""

    def validate_mnemonic(self, phrase: str) -> bool: ...

    def seed_from_mnemonic(self, phrase: str) -> bytes: ...

    def derive_key(self, seed: bytes, path: str) -> DerivedKey: ...

    def key_from_private_key_hex(self, value: str) -> DerivedKey: ...

    def sign(self, privkey: int, message_root: bytes, domain: bytes) -> bytes: ...


def normalize_mnemonic(phrase: str) -> str:
    """Lower-case a mnemonic and collapse its whitespace."""
    return " ".join(phrase.lower().split())


def parse_derivation_path(path: str) -> list[int]:
    """Split a path such as m/12381/3600/0/0/0 into child indices.

    Raises:
        PathInvalidError: If the path does not start at the master key or a
            component is not a 32-bit index
    """
    components = path.split("/")
    if components[0] != "m":
        raise PathInvalidError("not master at path component 0")

    indices = []
    for position, component in enumerate(components[1:], start=1):
        if not (component.isascii() and component.isdigit()):
            raise PathInvalidError(f"invalid index {component!r} at path component {position}")
        index = int(component)
        if index >= 2**32:
            raise PathInvalidError(f"index {index} too large at path component {position}")
        indices.append(index)
    return indices


class BLSKeySource:
    """Key source for BLS12-381 validator keys.

    initialize() must be called once before use; it loads the mnemonic
    word list.
    """

    def __init__(self, language: str = "english"):
        self.language = language
        self._mnemonic: Optional[Mnemonic] = None

    def initialize(self) -> None:
        if self._mnemonic is None:
            self._mnemonic = Mnemonic(self.language)
            logger.debug(f"Loaded {self.language} mnemonic word list")

    def _words(self) -> Mnemonic:
        if self._mnemonic is None:
            raise RuntimeError("key source used before initialize()")
        return self._mnemonic

    def validate_mnemonic(self, phrase: str) -> bool:
        return self._words().check(normalize_mnemonic(phrase))

    def seed_from_mnemonic(self, phrase: str, passphrase: str = "") -> bytes:
        self._words()
        return Mnemonic.to_seed(normalize_mnemonic(phrase), passphrase)

    def derive_key(self, seed: bytes, path: str) -> DerivedKey:
        """Derive the key pair at path from seed.

        Raises:
            PathInvalidError: If the path is malformed
            DerivationFailedError: If derivation itself fails
        """
        indices = parse_derivation_path(path)
        try:
            privkey = derive_sk_at_indices(seed, indices)
        except ValueError as e:
            raise DerivationFailedError(str(e)) from e
        return DerivedKey(pubkey=pubkey_from_privkey(privkey), privkey=privkey, path=path)

    def key_from_private_key_hex(self, value: str) -> DerivedKey:
        """Build a key pair from a hex-encoded 32-byte secret key.

        Raises:
            InvalidPrivateKeyError: If the value is not a usable secret key
        """
        stripped = value[2:] if value.startswith("0x") else value
        try:
            raw = decode_hex(stripped)
        except ValueError as e:
            raise InvalidPrivateKeyError(str(e)) from e
        if len(raw) != 32:
            raise InvalidPrivateKeyError(f"expected 32 bytes, got {len(raw)}")
        privkey = int.from_bytes(raw, "big")
        if not is_valid_privkey(privkey):
            raise InvalidPrivateKeyError(f"secret key {stripped} out of range")
        return DerivedKey(pubkey=pubkey_from_privkey(privkey), privkey=privkey)

    def sign(self, privkey: int, message_root: bytes, domain: bytes) -> bytes:
        """Sign a message root under a domain.

        Raises:
            SigningFailedError: If the BLS primitive rejects the input
        """
        if not is_valid_privkey(privkey):
            raise SigningFailedError("secret key out of range")
        signing_root = compute_signing_root(message_root, domain)
        try:
            return sign(privkey, signing_root)
        except Exception as e:
            raise SigningFailedError(str(e)) from e

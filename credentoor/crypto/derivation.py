"""EIP-2333 BLS12-381 key derivation.

Reference: https://eips.ethereum.org/EIPS/eip-2333
"""

from Crypto.Hash import SHA256
from Crypto.Protocol.KDF import HKDF

from . import curve_order, sha256
from ..spec.constants import KEYGEN_SALT, MIN_SEED_LENGTH

# Lamport chunk size and count: L = 32, K = 255
_LAMPORT_CHUNK = 32
_LAMPORT_CHUNKS = 255
# ceil((3 * ceil(log2(r))) / 16)
_KEYGEN_OKM_LENGTH = 48


def _hkdf_mod_r(ikm: bytes, key_info: bytes = b"") -> int:
    """Hash input keying material to a valid secret key."""
    salt = KEYGEN_SALT
    sk = 0
    while sk == 0:
        salt = sha256(salt)
        okm = HKDF(
            ikm + b"\x00",
            _KEYGEN_OKM_LENGTH,
            salt,
            SHA256,
            context=key_info + _KEYGEN_OKM_LENGTH.to_bytes(2, "big"),
        )
        sk = int.from_bytes(okm, "big") % curve_order
    return sk


def _ikm_to_lamport_sk(ikm: bytes, salt: bytes) -> list[bytes]:
    okm = HKDF(ikm, _LAMPORT_CHUNK * _LAMPORT_CHUNKS, salt, SHA256)
    return [okm[i:i + _LAMPORT_CHUNK] for i in range(0, len(okm), _LAMPORT_CHUNK)]


def _parent_sk_to_lamport_pk(parent_sk: int, index: int) -> bytes:
    salt = index.to_bytes(4, "big")
    ikm = parent_sk.to_bytes(32, "big")
    lamport_0 = _ikm_to_lamport_sk(ikm, salt)
    not_ikm = bytes(b ^ 0xFF for b in ikm)
    lamport_1 = _ikm_to_lamport_sk(not_ikm, salt)
    lamport_pk = b"".join(sha256(chunk) for chunk in lamport_0 + lamport_1)
    return sha256(lamport_pk)


def derive_master_sk(seed: bytes) -> int:
    """Derive the master secret key from a seed.

    Raises:
        ValueError: If the seed is shorter than 32 bytes
    """
    if len(seed) < MIN_SEED_LENGTH:
        raise ValueError(f"seed must be at least {MIN_SEED_LENGTH} bytes, got {len(seed)}")
    return _hkdf_mod_r(seed)


def derive_child_sk(parent_sk: int, index: int) -> int:
    """Derive the child secret key at index from a parent secret key."""
    if not 0 <= index < 2**32:
        raise ValueError(f"child index {index} out of range")
    return _hkdf_mod_r(_parent_sk_to_lamport_pk(parent_sk, index))


def derive_sk_at_indices(seed: bytes, indices: list[int]) -> int:
    """Derive the secret key reached by walking indices from the master key."""
    sk = derive_master_sk(seed)
    for index in indices:
        sk = derive_child_sk(sk, index)
    return sk

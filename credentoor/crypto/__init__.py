"""Cryptographic utilities.

BLS operations use py_ecc's G2ProofOfPossession ciphersuite, the one used by
the consensus layer.
"""

import hashlib
import logging

from py_ecc.bls import G2ProofOfPossession as _py_ecc_bls
from py_ecc.optimized_bls12_381 import curve_order

logger = logging.getLogger(__name__)


def sha256(data: bytes) -> bytes:
    """Compute SHA256 hash."""
    return hashlib.sha256(data).digest()


def hash_tree_root(obj) -> bytes:
    """Compute the hash tree root of an SSZ object or return bytes directly.

    Args:
        obj: SSZ object with hash_tree_root() method, or 32-byte root

    Returns:
        32-byte hash tree root
    """
    if isinstance(obj, bytes):
        if len(obj) == 32:
            return obj
        raise ValueError(f"Expected 32-byte root, got {len(obj)} bytes")

    if hasattr(obj, 'hash_tree_root'):
        root = obj.hash_tree_root()
        if isinstance(root, bytes):
            return root
        return bytes(root)

    raise TypeError(f"Cannot compute hash_tree_root of {type(obj)}")


def is_valid_privkey(privkey: int) -> bool:
    """Check a private key lies in the range [1, r)."""
    return 0 < privkey < curve_order


def sign(privkey: int, message: bytes) -> bytes:
    """Sign a message with a BLS private key."""
    return _py_ecc_bls.Sign(privkey, message)


def verify(pubkey: bytes, message: bytes, signature: bytes) -> bool:
    """Verify a BLS signature."""
    try:
        return _py_ecc_bls.Verify(pubkey, message, signature)
    except Exception as e:
        logger.debug(f"Signature verification raised: {e}")
        return False


def pubkey_from_privkey(privkey: int) -> bytes:
    """Derive public key from private key."""
    return _py_ecc_bls.SkToPk(privkey)


__all__ = [
    "curve_order",
    "sha256",
    "hash_tree_root",
    "is_valid_privkey",
    "sign",
    "verify",
    "pubkey_from_privkey",
]

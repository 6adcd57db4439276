"""Key sources and derived keys."""

from .types import DerivedKey
from .source import (
    BLSKeySource,
    KeySource,
    normalize_mnemonic,
    parse_derivation_path,
)

__all__ = [
    "BLSKeySource",
    "DerivedKey",
    "KeySource",
    "normalize_mnemonic",
    "parse_derivation_path",
]

"""Base SSZ types and primitives."""

from remerkleable.basic import uint64
from remerkleable.byte_arrays import Bytes4, Bytes32, Bytes48, Bytes96, ByteVector
from remerkleable.complex import Container

Bytes20 = ByteVector[20]

# Type aliases
Epoch = uint64
ValidatorIndex = uint64
Root = Bytes32
Version = Bytes4
DomainType = Bytes4
Domain = Bytes32
BLSPubkey = Bytes48
BLSSignature = Bytes96
ExecutionAddress = Bytes20


class ForkData(Container):
    current_version: Version
    genesis_validators_root: Root


class SigningData(Container):
    object_root: Root
    domain: Domain


__all__ = [
    "uint64",
    "Bytes4", "Bytes20", "Bytes32", "Bytes48", "Bytes96", "ByteVector",
    "Container",
    "Epoch", "ValidatorIndex",
    "Root", "Version", "DomainType", "Domain",
    "BLSPubkey", "BLSSignature", "ExecutionAddress",
    "ForkData", "SigningData",
]

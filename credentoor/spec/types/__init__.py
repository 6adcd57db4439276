"""SSZ types for withdrawal credential changes.

Types are organized by the fork that introduced them:
- base.py: Basic types and primitives
- capella.py: Capella types (BLS to execution changes)
"""

# Base types
from .base import (
    uint64,
    Bytes4, Bytes20, Bytes32, Bytes48, Bytes96, ByteVector,
    Container,
    Epoch, ValidatorIndex,
    Root, Version, DomainType, Domain,
    BLSPubkey, BLSSignature, ExecutionAddress,
    ForkData, SigningData,
)

# Capella
from .capella import (
    BLSToExecutionChange,
    SignedBLSToExecutionChange,
)

__all__ = [
    "uint64",
    "Bytes4", "Bytes20", "Bytes32", "Bytes48", "Bytes96", "ByteVector",
    "Container",
    "Epoch", "ValidatorIndex",
    "Root", "Version", "DomainType", "Domain",
    "BLSPubkey", "BLSSignature", "ExecutionAddress",
    "ForkData", "SigningData",
    "BLSToExecutionChange",
    "SignedBLSToExecutionChange",
]

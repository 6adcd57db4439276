"""Credential change request and result types."""

from dataclasses import dataclass, field

from ..spec.types import SignedBLSToExecutionChange

# Signed changes produced by one invocation, ordered by validator index.
Batch = tuple[SignedBLSToExecutionChange, ...]


@dataclass(frozen=True)
class ChangeRequest:
    """Raw parameters for a credential change invocation.

    Exactly one of path, validator or scan selects the validators. A raw
    seed with no other selector implies scan.
    """

    withdrawal_address: str = ""
    mnemonic: str = field(default="", repr=False)
    seed: bytes = field(default=b"", repr=False)
    private_key: str = field(default="", repr=False)
    path: str = ""
    validator: str = ""
    scan: bool = False

"""Key data types."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DerivedKey:
    """A BLS key pair and the path that produced it.

    The path is empty for keys supplied directly as a private key.
    """

    pubkey: bytes
    privkey: int = field(repr=False)
    path: str = ""

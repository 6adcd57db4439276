"""Derivation path validation and validator selector resolution.

Validator keys follow EIP-2334: the withdrawal key for account n lives at
m/12381/3600/n/0 and the validator signing key at m/12381/3600/n/0/0.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from ..chain.types import ChainSnapshot, ValidatorRecord
from ..exceptions import (
    ConflictingSelectorError,
    InputInvalidError,
    InvalidPublicKeyError,
    NoSelectorError,
    PathInvalidError,
    UnknownValidatorError,
)
from ..spec.constants import (
    BLS_PUBKEY_LENGTH,
    DEFAULT_MAX_DISTANCE,
    EIP2334_COIN_TYPE,
    EIP2334_PURPOSE,
)
from ..utils import decode_hex
from .types import ChangeRequest

logger = logging.getLogger(__name__)

VALIDATOR_PATH_PATTERN = re.compile(
    rf"^m/{EIP2334_PURPOSE}/{EIP2334_COIN_TYPE}/([0-9]+)/0/0$"
)


@dataclass(frozen=True)
class PathSelector:
    path: str


@dataclass(frozen=True)
class IndexSelector:
    index: int


@dataclass(frozen=True)
class PubkeySelector:
    pubkey: bytes


@dataclass(frozen=True)
class ScanSelector:
    """Try every account implied by the known validator set."""


Selector = Union[PathSelector, IndexSelector, PubkeySelector, ScanSelector]


@dataclass(frozen=True)
class Resolution:
    """Concrete paths to try and the validators a derived key may match.

    target is set when a single named validator was selected.
    """

    paths: tuple[str, ...]
    candidates: dict[bytes, ValidatorRecord]
    target: Optional[ValidatorRecord] = None


def validator_path(account: int) -> str:
    """Path of the validator signing key for an HD account."""
    return f"m/{EIP2334_PURPOSE}/{EIP2334_COIN_TYPE}/{account}/0/0"


def withdrawal_path(path: str) -> str:
    """Path of the withdrawal key that owns the validator key at path."""
    if not path.endswith("/0"):
        raise PathInvalidError(f"path {path} has no withdrawal key parent")
    return path[: -len("/0")]


def check_validator_path(path: str) -> int:
    """Check path is an EIP-2334 validator signing key path.

    Returns:
        The HD account number in the path

    Raises:
        PathInvalidError: If the path has any other shape
    """
    match = VALIDATOR_PATH_PATTERN.match(path)
    if match is None:
        raise PathInvalidError(f"path {path} does not match EIP-2334 format for a validator")
    return int(match.group(1))


def parse_validator(value: str) -> Union[IndexSelector, PubkeySelector]:
    """Interpret a validator string as an index or a public key.

    Raises:
        InvalidPublicKeyError: If a public key is malformed
    """
    if value.isascii() and value.isdigit():
        return IndexSelector(int(value))

    try:
        pubkey = decode_hex(value)
    except ValueError as e:
        raise InvalidPublicKeyError(f"{value} is not hex: {e}") from e
    if len(pubkey) != BLS_PUBKEY_LENGTH:
        raise InvalidPublicKeyError("incorrect length")
    return PubkeySelector(pubkey)


def select(request: ChangeRequest) -> Selector:
    """Work out how the request selects validators.

    Raises:
        ConflictingSelectorError: If more than one selector is supplied
        NoSelectorError: If no selector is supplied
    """
    given = [name for name, value in (
        ("path", request.path),
        ("validator", request.validator),
        ("scan", request.scan),
    ) if value]
    if len(given) > 1:
        raise ConflictingSelectorError(f"only one of {' and '.join(given)} may be supplied")

    if request.path:
        return PathSelector(request.path)
    if request.validator:
        return parse_validator(request.validator)
    if request.scan or request.seed:
        if request.private_key:
            raise InputInvalidError("a private key can only be used with a single validator")
        return ScanSelector()
    raise NoSelectorError("no validator path or validator specified")


def find_validator(chain: ChainSnapshot, selector: Union[IndexSelector, PubkeySelector]) -> ValidatorRecord:
    """Look up the record a validator selector names.

    Raises:
        UnknownValidatorError: If the chain has no such validator
    """
    if isinstance(selector, IndexSelector):
        record = chain.by_index(selector.index)
    else:
        record = chain.by_pubkey(selector.pubkey)
    if record is None:
        raise UnknownValidatorError("unknown validator")
    return record


def resolve(
    selector: Selector,
    chain: ChainSnapshot,
    max_distance: int = DEFAULT_MAX_DISTANCE,
) -> Resolution:
    """Turn a selector into the concrete paths to derive.

    A named validator is tried at the account matching its index first, then
    at every other account below max_distance.
    """
    if isinstance(selector, PathSelector):
        check_validator_path(selector.path)
        return Resolution(paths=(selector.path,), candidates=chain.pubkey_map())

    if isinstance(selector, ScanSelector):
        paths = tuple(validator_path(index) for index in chain.indices())
        logger.debug(f"Scanning {len(paths)} validator paths")
        return Resolution(paths=paths, candidates=chain.pubkey_map())

    record = find_validator(chain, selector)
    accounts = [record.index]
    accounts.extend(i for i in range(max_distance) if i != record.index)
    return Resolution(
        paths=tuple(validator_path(account) for account in accounts),
        candidates={record.pubkey: record},
        target=record,
    )

"""Withdrawal credential change generation."""

from .types import Batch, ChangeRequest
from .inputs import parse_withdrawal_address
from .paths import (
    IndexSelector,
    PathSelector,
    PubkeySelector,
    Resolution,
    ScanSelector,
    check_validator_path,
    resolve,
    select,
    validator_path,
    withdrawal_path,
)
from .matcher import Match, MatchOutcome, match_validator, verify_withdrawal_credentials
from .builder import build_change, build_signed_change, change_domain
from .generator import ChangeGenerator, validate_request
from .export import change_from_json, change_to_json, read_changes, write_changes

__all__ = [
    "Batch",
    "ChangeGenerator",
    "ChangeRequest",
    "IndexSelector",
    "Match",
    "MatchOutcome",
    "PathSelector",
    "PubkeySelector",
    "Resolution",
    "ScanSelector",
    "build_change",
    "build_signed_change",
    "change_domain",
    "change_from_json",
    "change_to_json",
    "check_validator_path",
    "match_validator",
    "parse_withdrawal_address",
    "read_changes",
    "resolve",
    "select",
    "validate_request",
    "validator_path",
    "verify_withdrawal_credentials",
    "withdrawal_path",
    "write_changes",
]

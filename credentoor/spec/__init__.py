"""Consensus spec pieces needed to build and sign BLS to execution changes."""

from . import constants
from .domain import compute_domain, compute_fork_data_root, compute_signing_root

__all__ = ["constants", "compute_domain", "compute_fork_data_root", "compute_signing_root"]

"""Token labels and canonical serialization.

Every token that is ever compared (from the dataset or from a query) goes
through normalize_token_label() first, otherwise membership tests against
the graph silently fail.
"""

import json
import re
from typing import Any

from web3 import Web3

# 40 hex digits, optionally prefixed with 0x (case-insensitive)
_HEX_ADDRESS_RE = re.compile(r"^(0[xX])?[0-9a-fA-F]{40}$")


def is_hex_address(value: str) -> bool:
    """Check if a string looks like a 20-byte hex address.

    Args:
        value: String to check (surrounding whitespace is not stripped)

    Returns:
        True for 40 hex digits with or without a 0x prefix
    """
    return isinstance(value, str) and _HEX_ADDRESS_RE.match(value) is not None


def to_checksum_address(address: str) -> str:
    """Convert a hex address to its EIP-55 checksum form.

    Args:
        address: 40 hex digits, with or without 0x, in any case

    Returns:
        0x-prefixed mixed-case checksum address

    Raises:
        ValueError: If the input is not a hex address
    """
    if not is_hex_address(address):
        raise ValueError(f"Invalid address: {address}")
    lower = address.lower()
    if not lower.startswith("0x"):
        lower = "0x" + lower
    return str(Web3.to_checksum_address(lower))


def normalize_token_label(label: str) -> str:
    """Canonicalize a token label.

    Hex addresses become checksum-cased; anything else (a symbol like
    "USDC") is returned with surrounding whitespace trimmed and its case
    untouched. Idempotent: normalizing twice gives the same result.

    Args:
        label: Raw token identifier from the dataset or from a query

    Returns:
        Normalized token label
    """
    trimmed = str(label).strip()
    if is_hex_address(trimmed):
        return to_checksum_address(trimmed)
    return trimmed


def canonical_json(value: Any) -> str:
    """Serialize a value with mapping keys sorted.

    Used for pool-node identity, sorting and grouping so that argument and
    parameter sets that differ only in key order serialize identically.
    Arrays keep their source order.
    """
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)


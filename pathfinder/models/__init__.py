"""Pydantic models for datasets and reports."""

from pathfinder.models.dataset import AdapterEntry, PoolRecord, parse_dataset
from pathfinder.models.report import (
    AdapterGroup,
    PathsReport,
    PathSummary,
    PoolSummary,
    Report,
    TokensReport,
    UnionReport,
)
from pathfinder.models.types import canonical_json, normalize_token_label

__all__ = [
    # Types
    "canonical_json",
    "normalize_token_label",
    # Dataset models
    "AdapterEntry",
    "PoolRecord",
    "parse_dataset",
    # Report models
    "AdapterGroup",
    "PathSummary",
    "PathsReport",
    "PoolSummary",
    "Report",
    "TokensReport",
    "UnionReport",
]

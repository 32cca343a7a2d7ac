"""Query configuration and dispatch.

QueryConfig is built once at the boundary (CLI or HTTP) and passed into the
core; the search code never reads ambient configuration. run_query()
validates the query tokens against the graph before any search starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog

from pathfinder.constants import DEFAULT_K, DEFAULT_MAX_DEPTH
from pathfinder.errors import QueryError, TokenNotFoundError
from pathfinder.graph import PoolGraph
from pathfinder.models.report import Report
from pathfinder.models.types import normalize_token_label
from pathfinder.presenter import present_paths, present_tokens, present_union
from pathfinder.routing.pathfinding import PathFinder

logger = structlog.get_logger()


class QueryMode(str, Enum):
    """What a query reports."""

    PATHS = "paths"
    UNION = "union"
    TOKENS = "tokens"


@dataclass(frozen=True)
class QueryConfig:
    """Immutable description of one query.

    Attributes:
        token_in: Token to route from (normalized on construction)
        token_out: Token to route to (normalized on construction)
        k: Maximum number of paths to list, 0 for unlimited (ignored in union mode)
        max_depth: Maximum number of hops per route
        mode: Requested mode. None picks union when k == 0, paths otherwise.
    """

    token_in: str = ""
    token_out: str = ""
    k: int = DEFAULT_K
    max_depth: int = DEFAULT_MAX_DEPTH
    mode: QueryMode | None = None

    def __post_init__(self) -> None:
        if self.k < 0:
            raise QueryError(f"k must be >= 0, got {self.k}")
        if self.max_depth < 1:
            raise QueryError(f"max_depth must be >= 1, got {self.max_depth}")
        # Frozen dataclass: bypass __setattr__ to store normalized labels
        object.__setattr__(self, "token_in", normalize_token_label(self.token_in or ""))
        object.__setattr__(self, "token_out", normalize_token_label(self.token_out or ""))
        if self.mode is not None:
            object.__setattr__(self, "mode", QueryMode(self.mode))

    @property
    def effective_mode(self) -> QueryMode:
        """Mode actually run: an unlimited path listing becomes a union query."""
        if self.mode is not None:
            return self.mode
        return QueryMode.UNION if self.k == 0 else QueryMode.PATHS


def validate_tokens(graph: PoolGraph, config: QueryConfig) -> None:
    """Check that both query tokens are present and are graph members.

    Raises:
        QueryError: If token_in or token_out is missing
        TokenNotFoundError: If a token is not in the graph
    """
    if not config.token_in or not config.token_out:
        raise QueryError("Please provide token_in and token_out (list tokens to see available).")
    tokens = graph.tokens
    if config.token_in not in tokens:
        raise TokenNotFoundError(config.token_in, "token_in")
    if config.token_out not in tokens:
        raise TokenNotFoundError(config.token_out, "token_out")


def run_query(graph: PoolGraph, config: QueryConfig, finder: PathFinder | None = None) -> Report:
    """Run a query against a graph.

    Args:
        graph: Built graph
        config: Query to run
        finder: Optional PathFinder over the same graph, to reuse its cache

    Returns:
        TokensReport, PathsReport or UnionReport depending on the mode.
        An empty report means no route exists; that is not an error.

    Raises:
        QueryError: If the query tokens are missing or not in the graph
    """
    mode = config.effective_mode
    if mode is QueryMode.TOKENS:
        return present_tokens(graph)

    validate_tokens(graph, config)
    finder = finder or PathFinder(graph)

    logger.info(
        "query_started",
        mode=mode.value,
        token_in=config.token_in,
        token_out=config.token_out,
        k=config.k,
        max_depth=config.max_depth,
    )

    if mode is QueryMode.UNION:
        union = finder.find_union(config.token_in, config.token_out, config.max_depth)
        report = present_union(union, graph, config.token_in, config.token_out, config.max_depth)
        logger.info("union_found", pool_nodes=report.pool_count, tokens=len(report.tokens))
        return report

    paths = finder.find_paths(config.token_in, config.token_out, config.k, config.max_depth)
    logger.info("paths_found", count=len(paths))
    return present_paths(
        paths, graph, config.token_in, config.token_out, config.k, config.max_depth
    )


__all__ = ["QueryConfig", "QueryMode", "run_query", "validate_tokens"]

"""Canonical grouping and ordering of search results.

Union results are grouped by (adapter, arguments) and sorted with the same
canonical serialization used for pool-node identity, so a report does not
depend on dataset ordering or set iteration order. Path results keep their
discovery order, which is itself fixed by the graph's sorted adjacency.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pathfinder.graph import PoolGraph, PoolNode
from pathfinder.models.report import (
    AdapterGroup,
    PathsReport,
    PathSummary,
    PoolSummary,
    TokensReport,
    UnionReport,
)
from pathfinder.models.types import canonical_json
from pathfinder.routing.types import Path, UnionResult, path_node_ids, path_tokens


def _unique(items: Iterable[str]) -> list[str]:
    """Drop duplicates, keeping first occurrences in order."""
    return list(dict.fromkeys(items))


def pool_summary(node: PoolNode) -> PoolSummary:
    return PoolSummary(
        id=node.id,
        adapter=node.adapter,
        arguments=dict(node.arguments),
        parameters=dict(node.parameters),
        tokens=list(node.tokens),
    )


def summarize_path(path: Path, graph: PoolGraph) -> PathSummary:
    """Summarize one path.

    Args:
        path: Path returned by the enumerator
        graph: Graph the path was found in

    Returns:
        PathSummary with the token sequence, the de-duplicated pool-node ids
        in hop order, and the tokens touched by those pool-nodes
    """
    node_ids = _unique(path_node_ids(path))
    nodes = [graph.node(node_id) for node_id in node_ids]
    return PathSummary(
        tokens=path_tokens(path),
        node_ids=node_ids,
        pools=[pool_summary(node) for node in nodes],
        compatibility_tokens=_unique(token for node in nodes for token in node.tokens),
    )


def present_paths(
    paths: Sequence[Path],
    graph: PoolGraph,
    token_in: str,
    token_out: str,
    k: int,
    max_depth: int,
) -> PathsReport:
    """Build a paths report, keeping discovery order."""
    return PathsReport(
        token_in=token_in,
        token_out=token_out,
        k=k,
        max_depth=max_depth,
        paths=[summarize_path(path, graph) for path in paths],
    )


def group_pool_nodes(nodes: Iterable[PoolNode]) -> list[AdapterGroup]:
    """Group pool-nodes by (adapter, canonical arguments).

    Groups are sorted by adapter name, then by serialized arguments; pools
    within a group are sorted by serialized parameters (then by id, which
    only matters for pools with identical parameters).
    """
    grouped: dict[tuple[str, str], list[PoolNode]] = {}
    for node in nodes:
        key = (node.adapter, canonical_json(dict(node.arguments)))
        grouped.setdefault(key, []).append(node)

    groups: list[AdapterGroup] = []
    for key in sorted(grouped):
        members = sorted(grouped[key], key=lambda n: (canonical_json(dict(n.parameters)), n.id))
        first = members[0]
        groups.append(
            AdapterGroup(
                adapter=first.adapter,
                arguments=dict(first.arguments),
                pools=[pool_summary(node) for node in members],
            )
        )
    return groups


def present_union(
    result: UnionResult,
    graph: PoolGraph,
    token_in: str,
    token_out: str,
    max_depth: int,
) -> UnionReport:
    """Build a union report: sorted adapter groups and sorted tokens."""
    nodes = [graph.node(node_id) for node_id in result.node_ids]
    return UnionReport(
        token_in=token_in,
        token_out=token_out,
        max_depth=max_depth,
        groups=group_pool_nodes(nodes),
        tokens=sorted(result.tokens),
    )


def present_tokens(graph: PoolGraph) -> TokensReport:
    """List every token of the graph, sorted."""
    return TokensReport(tokens=sorted(graph.tokens))


__all__ = [
    "group_pool_nodes",
    "pool_summary",
    "present_paths",
    "present_tokens",
    "present_union",
    "summarize_path",
]

"""Token multigraph built from adapter/pool records.

Tokens are vertices. Every pool-node contributes one directed edge for each
ordered pair of its distinct tokens, tagged with the pool-node id, so a pool
touching N tokens yields N*(N-1) edges. Edges between the same token pair
coming from different pool-nodes stay distinct.

The graph is built once and never mutated afterwards; the search code only
reads it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from pathfinder.constants import IDENTITY_KEYS
from pathfinder.models.dataset import AdapterEntry
from pathfinder.models.types import canonical_json, normalize_token_label

logger = structlog.get_logger()

PoolNodeId = str


@dataclass(frozen=True)
class PoolNode:
    """One configured instance of an adapter.

    Attributes:
        id: Deterministic identifier (see make_node_id)
        adapter: Adapter name
        arguments: Arguments shared by every pool of the adapter entry
        parameters: Parameters specific to this pool instance
        tokens: Distinct normalized tokens, in source order
    """

    id: PoolNodeId
    adapter: str
    arguments: Mapping[str, Any] = field(default_factory=dict, compare=False)
    parameters: Mapping[str, Any] = field(default_factory=dict, compare=False)
    tokens: tuple[str, ...] = ()


@dataclass(frozen=True)
class Edge:
    """Directed hop from source to target through one pool-node."""

    source: str
    target: str
    node_id: PoolNodeId


def normalize_pool_tokens(raw_tokens: Iterable[Any]) -> tuple[str, ...]:
    """Normalize a raw token list.

    Non-string and empty entries are dropped, and duplicates (after
    normalization) are removed keeping the first occurrence.
    """
    seen: dict[str, None] = {}
    for token in raw_tokens:
        if not isinstance(token, str) or not token.strip():
            continue
        seen.setdefault(normalize_token_label(token), None)
    return tuple(seen)


def pool_identity(parameters: Mapping[str, Any]) -> str:
    """Pick the parameter that best identifies a pool instance.

    The first truthy value among IDENTITY_KEYS wins; otherwise the whole
    parameter set is serialized canonically.
    """
    for key in IDENTITY_KEYS:
        value = parameters.get(key)
        if value:
            return str(value)
    return canonical_json(dict(parameters))


def make_node_id(adapter: str, parameters: Mapping[str, Any], tokens: Iterable[str]) -> PoolNodeId:
    """Build the pool-node id: ``adapter::identity::token1|token2|...``.

    Pools with the same adapter, identity and token list collide on purpose
    and are treated as a single node. The graph keeps the colliding node
    with the smallest canonical (arguments, parameters) pair.
    """
    return f"{adapter}::{pool_identity(parameters)}::{'|'.join(tokens)}"


def _collision_rank(node: PoolNode) -> tuple[str, str]:
    """Order colliding pool-nodes by content so the survivor ignores dataset order."""
    return canonical_json(dict(node.arguments)), canonical_json(dict(node.parameters))


class PoolGraph:
    """Directed multigraph of tokens connected by pool-nodes.

    Provides forward and reverse adjacency lists plus a pool-node lookup.
    Adjacency lists are sorted by (other token, pool-node id) so that
    traversal order does not depend on the order of the input dataset.

    Usage:
        graph = PoolGraph.from_entries(parse_dataset(data))
        for edge in graph.outgoing("USDC"):
            ...
    """

    def __init__(self) -> None:
        """Initialize an empty graph. Use from_entries() or from_nodes() to build one."""
        self._tokens: set[str] = set()
        self._forward: dict[str, tuple[Edge, ...]] = {}
        self._reverse: dict[str, tuple[Edge, ...]] = {}
        self._nodes: dict[PoolNodeId, PoolNode] = {}
        self._edge_count = 0

    @classmethod
    def from_entries(cls, entries: Iterable[AdapterEntry]) -> PoolGraph:
        """Build a graph from validated adapter entries.

        Args:
            entries: Adapter entries, each with its pool records

        Returns:
            PoolGraph with one pool-node per distinct pool id
        """
        nodes: list[PoolNode] = []
        for entry in entries:
            for pool in entry.pools:
                tokens = normalize_pool_tokens(pool.tokens)
                nodes.append(
                    PoolNode(
                        id=make_node_id(entry.adapter, pool.parameters, tokens),
                        adapter=entry.adapter,
                        arguments=entry.arguments,
                        parameters=pool.parameters,
                        tokens=tokens,
                    )
                )
        return cls.from_nodes(nodes)

    @classmethod
    def from_nodes(cls, nodes: Iterable[PoolNode]) -> PoolGraph:
        """Build a graph from already constructed pool-nodes."""
        graph = cls()
        graph._build(nodes)
        return graph

    def _build(self, nodes: Iterable[PoolNode]) -> None:
        forward: dict[str, list[Edge]] = {}
        reverse: dict[str, list[Edge]] = {}

        for node in nodes:
            kept = self._nodes.get(node.id)
            if kept is not None:
                logger.debug("pool_node_collision", node_id=node.id)
            if kept is None or _collision_rank(node) < _collision_rank(kept):
                self._nodes[node.id] = node

        for node in self._nodes.values():
            self._tokens.update(node.tokens)

            for source in node.tokens:
                for target in node.tokens:
                    if source == target:
                        continue
                    edge = Edge(source, target, node.id)
                    forward.setdefault(source, []).append(edge)
                    reverse.setdefault(target, []).append(edge)
                    self._edge_count += 1

        self._forward = {
            token: tuple(sorted(edges, key=lambda e: (e.target, e.node_id)))
            for token, edges in forward.items()
        }
        self._reverse = {
            token: tuple(sorted(edges, key=lambda e: (e.source, e.node_id)))
            for token, edges in reverse.items()
        }

        logger.debug(
            "graph_built",
            pool_nodes=len(self._nodes),
            tokens=len(self._tokens),
            edges=self._edge_count,
        )

    def outgoing(self, token: str) -> tuple[Edge, ...]:
        """Edges leaving token (token must already be normalized)."""
        return self._forward.get(token, ())

    def incoming(self, token: str) -> tuple[Edge, ...]:
        """Edges arriving at token (token must already be normalized)."""
        return self._reverse.get(token, ())

    def node(self, node_id: PoolNodeId) -> PoolNode:
        """Look up a pool-node by id.

        Raises:
            KeyError: If no pool-node has this id
        """
        return self._nodes[node_id]

    @property
    def tokens(self) -> frozenset[str]:
        """Every distinct token touched by any pool-node."""
        return frozenset(self._tokens)

    @property
    def nodes(self) -> tuple[PoolNode, ...]:
        return tuple(self._nodes.values())

    @property
    def token_count(self) -> int:
        return len(self._tokens)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        """Number of directed edges (parallel edges counted separately)."""
        return self._edge_count


__all__ = [
    "Edge",
    "PoolGraph",
    "PoolNode",
    "PoolNodeId",
    "make_node_id",
    "normalize_pool_tokens",
    "pool_identity",
]

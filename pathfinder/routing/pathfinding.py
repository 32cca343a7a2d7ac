"""Simple-path enumeration over the pool graph.

enumerate_paths() lists routes breadth-first, so shorter routes come out
before longer ones. PathFinder is a facade that owns one immutable graph and
caches query results, since the graph never changes after construction.
"""

from __future__ import annotations

import threading
from collections import deque

import structlog

from pathfinder.constants import DEFAULT_CACHE_SIZE
from pathfinder.graph import PoolGraph
from pathfinder.routing.types import Path, PathStep, UnionResult
from pathfinder.routing.union import union_of_routes

logger = structlog.get_logger()


def enumerate_paths(
    graph: PoolGraph,
    start: str,
    goal: str,
    k: int = 1,
    max_depth: int = 5,
) -> list[Path]:
    """List up to k simple paths from start to goal.

    Level-order exploration of simple paths from the single-step path
    [start]. A path ending at goal is recorded and not extended, but the
    paths still queued keep being processed, so goal may be reached again
    through other branches until k results are collected.

    With start == goal the zero-hop path [start] is the first result.

    Args:
        graph: Graph to search (start and goal must be normalized members)
        start: Token to start from
        goal: Token to reach
        k: Maximum number of paths to return, 0 for all of them
        max_depth: Maximum number of hops per path

    Returns:
        Paths in discovery order. Empty list if none exists within max_depth.
    """
    results: list[Path] = []
    # Each entry carries its visited set to avoid rebuilding it per expansion
    queue: deque[tuple[Path, frozenset[str]]] = deque(
        [((PathStep(start),), frozenset([start]))]
    )
    max_steps = max_depth + 1

    while queue and (k == 0 or len(results) < k):
        path, visited = queue.popleft()
        if len(path) > max_steps:
            continue

        last = path[-1].token
        if last == goal:
            results.append(path)
            continue

        # Extensions would exceed the hop budget
        if len(path) == max_steps:
            continue

        for edge in graph.outgoing(last):
            if edge.target in visited:
                continue
            queue.append((path + (PathStep(edge.target, edge.node_id),), visited | {edge.target}))

    return results


class PathFinder:
    """Facade for route queries over one graph, with caching.

    Usage:
        finder = PathFinder(graph)
        paths = finder.find_paths(token_in, token_out, k=10, max_depth=4)
        union = finder.find_union(token_in, token_out, max_depth=4)

    Tokens must already be normalized graph members; validation happens at
    the query boundary (see pathfinder.query).
    """

    def __init__(self, graph: PoolGraph, cache_size: int = DEFAULT_CACHE_SIZE) -> None:
        """Initialize PathFinder for a graph.

        Args:
            graph: The graph to search
            cache_size: Maximum number of results kept per cache; the oldest
                entry is evicted first
        """
        self._graph = graph
        self._cache_size = max(1, cache_size)
        self._cache_lock = threading.Lock()
        # (start, goal, k, max_depth) -> paths
        self._path_cache: dict[tuple[str, str, int, int], list[Path]] = {}
        # (start, goal, max_depth) -> union
        self._union_cache: dict[tuple[str, str, int], UnionResult] = {}

    @property
    def graph(self) -> PoolGraph:
        return self._graph

    def invalidate(self) -> None:
        """Drop every cached path and union result."""
        with self._cache_lock:
            self._path_cache.clear()
            self._union_cache.clear()

    def _remember(self, cache: dict, key: tuple, value: object) -> None:
        # Queries may run on executor threads (see pathfinder.api)
        with self._cache_lock:
            while cache and len(cache) >= self._cache_size:
                # Dicts keep insertion order, so the first key is the oldest
                del cache[next(iter(cache))]
            cache[key] = value

    def find_paths(self, start: str, goal: str, k: int = 1, max_depth: int = 5) -> list[Path]:
        """Find up to k simple paths (k=0 for all) within max_depth hops."""
        cache_key = (start, goal, k, max_depth)
        if cache_key in self._path_cache:
            return self._path_cache[cache_key]

        paths = enumerate_paths(self._graph, start, goal, k=k, max_depth=max_depth)
        logger.debug(
            "paths_enumerated",
            token_in=start,
            token_out=goal,
            k=k,
            max_depth=max_depth,
            found=len(paths),
        )
        self._remember(self._path_cache, cache_key, paths)
        return paths

    def find_union(self, start: str, goal: str, max_depth: int = 5) -> UnionResult:
        """Union of pool-nodes and tokens over every simple route within max_depth."""
        cache_key = (start, goal, max_depth)
        if cache_key in self._union_cache:
            return self._union_cache[cache_key]

        result = union_of_routes(self._graph, start, goal, max_depth)
        self._remember(self._union_cache, cache_key, result)
        return result


__all__ = ["PathFinder", "enumerate_paths"]

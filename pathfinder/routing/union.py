"""Union of every pool-node and token lying on some simple route.

Instead of materializing each route, a depth-first search from the start
token walks every structurally distinct simple route once, pruned with the
hop distance of each token to the goal (computed by a reverse BFS).

The worst case is still exponential in the number of distinct simple routes
on dense graphs with a large max_depth; there is no iteration or time cap.
"""

from __future__ import annotations

from collections import deque

import structlog

from pathfinder.graph import PoolGraph
from pathfinder.routing.types import UnionResult

logger = structlog.get_logger()


def shortest_distances_to_goal(graph: PoolGraph, goal: str) -> dict[str, int]:
    """Minimum hop count from every token that can reach goal.

    Breadth-first search over the reverse adjacency starting at goal.
    Tokens missing from the result cannot reach goal at all.

    Args:
        graph: Graph to search
        goal: Target token (normalized)

    Returns:
        Mapping of token to hop distance, with goal itself at 0
    """
    distances = {goal: 0}
    queue: deque[str] = deque([goal])

    while queue:
        token = queue.popleft()
        next_distance = distances[token] + 1
        for edge in graph.incoming(token):
            if edge.source not in distances:
                distances[edge.source] = next_distance
                queue.append(edge.source)

    return distances


def union_of_routes(graph: PoolGraph, start: str, goal: str, max_depth: int) -> UnionResult:
    """Collect every pool-node and token on any simple route within max_depth.

    A branch is pruned when its token cannot reach goal, when depth exceeds
    max_depth, or when depth plus the token's distance to goal exceeds
    max_depth. Neither rule removes a branch that could still complete in
    budget. On reaching goal the branch's pool-nodes, and every token they
    touch, are merged into the result and the branch stops there.

    Args:
        graph: Graph to search
        start: Token to start from (normalized graph member)
        goal: Token to reach (normalized graph member)
        max_depth: Maximum number of hops per route

    Returns:
        UnionResult, empty when no route exists within max_depth
    """
    distances = shortest_distances_to_goal(graph, goal)

    node_ids: set[str] = set()
    tokens: set[str] = set()
    visited: set[str] = {start}
    branch: list[str] = []
    routes_found = 0

    def dfs(token: str, depth: int) -> None:
        nonlocal routes_found

        remaining = distances.get(token)
        if remaining is None:
            return
        if depth > max_depth or depth + remaining > max_depth:
            return

        if token == goal:
            routes_found += 1
            for node_id in branch:
                if node_id not in node_ids:
                    node_ids.add(node_id)
                    tokens.update(graph.node(node_id).tokens)
            return

        for edge in graph.outgoing(token):
            if edge.target in visited:
                continue
            visited.add(edge.target)
            branch.append(edge.node_id)
            dfs(edge.target, depth + 1)
            branch.pop()
            visited.discard(edge.target)

    dfs(start, 0)

    logger.debug(
        "union_search_complete",
        token_in=start,
        token_out=goal,
        max_depth=max_depth,
        routes=routes_found,
        pool_nodes=len(node_ids),
        tokens=len(tokens),
    )
    return UnionResult(node_ids=frozenset(node_ids), tokens=frozenset(tokens))


__all__ = ["shortest_distances_to_goal", "union_of_routes"]

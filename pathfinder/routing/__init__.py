"""Route discovery.

Module structure:
- types.py: PathStep, Path and UnionResult
- pathfinding.py: breadth-first simple-path enumeration and the PathFinder facade
- union.py: pruned depth-first union of every route within a hop budget
"""

from pathfinder.routing.pathfinding import PathFinder, enumerate_paths
from pathfinder.routing.types import Path, PathStep, UnionResult
from pathfinder.routing.union import shortest_distances_to_goal, union_of_routes

__all__ = [
    "Path",
    "PathFinder",
    "PathStep",
    "UnionResult",
    "enumerate_paths",
    "shortest_distances_to_goal",
    "union_of_routes",
]

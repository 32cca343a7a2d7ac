"""Route types shared by the path enumerator and the union engine."""

from dataclasses import dataclass, field
from typing import NamedTuple, TypeAlias


class PathStep(NamedTuple):
    """A token reached on a path.

    via is the pool-node id of the edge used to reach the token; it is None
    for the first step only.
    """

    token: str
    via: str | None = None


# Ordered steps with no repeated token; hop count is len(path) - 1
Path: TypeAlias = tuple[PathStep, ...]


def path_tokens(path: Path) -> list[str]:
    """Tokens visited by a path, in order."""
    return [step.token for step in path]


def path_node_ids(path: Path) -> list[str]:
    """Pool-node ids used by a path, in hop order (may repeat)."""
    return [step.via for step in path if step.via is not None]


@dataclass(frozen=True)
class UnionResult:
    """Pool-nodes and tokens lying on at least one valid simple route.

    Attributes:
        node_ids: Pool-nodes used by some route from start to goal
        tokens: Every token touched by those pool-nodes
    """

    node_ids: frozenset[str] = field(default_factory=frozenset)
    tokens: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not self.node_ids


__all__ = ["Path", "PathStep", "UnionResult", "path_node_ids", "path_tokens"]

"""Pydantic models for query reports.

Reports are fully ordered at construction time (see pathfinder.presenter),
so serializing one twice, or across runs over the same dataset, yields
byte-identical output.
"""

from typing import Any

from pydantic import BaseModel, Field


class PoolSummary(BaseModel):
    """A pool-node as it appears in a report."""

    id: str
    adapter: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    parameters: dict[str, Any] = Field(default_factory=dict)
    tokens: list[str] = Field(default_factory=list)


class AdapterGroup(BaseModel):
    """Pools sharing the same adapter and the same arguments."""

    adapter: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    pools: list[PoolSummary] = Field(default_factory=list)


class UnionReport(BaseModel):
    """Every adapter and token lying on some route within the hop budget."""

    mode: str = "union"
    token_in: str
    token_out: str
    max_depth: int
    groups: list[AdapterGroup] = Field(default_factory=list)
    tokens: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when no route exists within the hop budget."""
        return not self.groups

    @property
    def pool_count(self) -> int:
        return sum(len(group.pools) for group in self.groups)


class PathSummary(BaseModel):
    """One simple route with the pools it uses.

    compatibility_tokens is the union of the tokens touched by this path's
    pools, not the global union over all routes.
    """

    tokens: list[str]
    node_ids: list[str] = Field(default_factory=list)
    pools: list[PoolSummary] = Field(default_factory=list)
    compatibility_tokens: list[str] = Field(default_factory=list)


class PathsReport(BaseModel):
    """Routes in discovery order (shortest first)."""

    mode: str = "paths"
    token_in: str
    token_out: str
    k: int
    max_depth: int
    paths: list[PathSummary] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.paths


class TokensReport(BaseModel):
    """All distinct tokens of the graph, sorted."""

    mode: str = "tokens"
    tokens: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.tokens


Report = UnionReport | PathsReport | TokensReport

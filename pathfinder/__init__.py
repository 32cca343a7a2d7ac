"""Pool Pathfinder - route discovery over liquidity-pool datasets."""

from pathfinder.graph import PoolGraph
from pathfinder.query import QueryConfig, QueryMode, run_query

__version__ = "0.1.0"
__all__ = ["PoolGraph", "QueryConfig", "QueryMode", "run_query", "__version__"]

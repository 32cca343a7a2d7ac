"""Dataset loading.

Every failure (missing file, undecodable bytes, invalid JSON, schema mismatch) is raised as
DatasetError before a graph is built, so no partial graph is ever exposed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from pathfinder.errors import DatasetError
from pathfinder.graph import PoolGraph
from pathfinder.models.dataset import AdapterEntry, parse_dataset

logger = structlog.get_logger()


def parse_entries(data: Any) -> list[AdapterEntry]:
    """Validate decoded JSON as adapter entries.

    Raises:
        DatasetError: If the data is not a list of adapter entries
    """
    try:
        return parse_dataset(data)
    except ValidationError as err:
        raise DatasetError(
            f"Dataset does not match the expected structure: {err.error_count()} error(s)\n{err}"
        ) from err


def load_entries(path: str | Path) -> list[AdapterEntry]:
    """Read and validate a dataset file.

    Args:
        path: Path to a JSON file holding a list of adapter entries

    Returns:
        Validated adapter entries

    Raises:
        DatasetError: If the file is missing, unreadable or malformed
    """
    abs_path = Path(path).resolve()
    if not abs_path.is_file():
        raise DatasetError(f"File not found: {abs_path}")

    try:
        with open(abs_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as err:
        raise DatasetError(f"Invalid JSON in {abs_path}: {err}") from err
    except UnicodeDecodeError as err:
        raise DatasetError(f"Dataset is not valid UTF-8: {abs_path}: {err}") from err
    except OSError as err:
        raise DatasetError(f"Cannot read {abs_path}: {err}") from err

    entries = parse_entries(data)
    logger.debug(
        "dataset_loaded",
        path=str(abs_path),
        adapters=len(entries),
        pools=sum(len(entry.pools) for entry in entries),
    )
    return entries


def load_graph(path: str | Path) -> PoolGraph:
    """Load a dataset file and build its graph."""
    graph = PoolGraph.from_entries(load_entries(path))
    logger.info(
        "graph_loaded",
        path=str(path),
        pool_nodes=graph.node_count,
        tokens=graph.token_count,
        edges=graph.edge_count,
    )
    return graph


__all__ = ["load_entries", "load_graph", "parse_entries"]

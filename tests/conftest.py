"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from pathfinder.graph import PoolGraph
from pathfinder.loader import load_graph

FIXTURES_DIR = Path(__file__).parent / "fixtures"
POOLS_PATH = FIXTURES_DIR / "pools.json"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return FIXTURES_DIR


@pytest.fixture
def pools_path() -> Path:
    """Return the path of the sample pool dataset."""
    return POOLS_PATH


@pytest.fixture
def fixture_graph() -> PoolGraph:
    """Graph built from the sample pool dataset."""
    return load_graph(POOLS_PATH)

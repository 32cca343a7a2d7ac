"""Integration tests for the pathfinder API."""

import asyncio
from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pathfinder.api.endpoints import get_finder
from pathfinder.api.main import app
from pathfinder.loader import load_graph
from pathfinder.query import run_query
from pathfinder.routing.pathfinding import PathFinder
from tests.helpers import (
    ETHENA_MINT_ID,
    FIXTURE_TOKENS,
    UNIV3_USDC_WETH_ID,
    USDC,
    USDE,
    WETH,
)


@pytest.fixture
def client(pools_path: Path) -> Iterator[TestClient]:
    """Create a test client serving the fixture dataset."""
    finder = PathFinder(load_graph(pools_path))
    app.dependency_overrides[get_finder] = lambda: finder
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    """Tests for GET /health."""

    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestTokensEndpoint:
    """Tests for GET /tokens."""

    def test_lists_sorted_tokens(self, client: TestClient) -> None:
        response = client.get("/tokens")
        assert response.status_code == 200
        assert response.json() == {"mode": "tokens", "tokens": FIXTURE_TOKENS}


class TestQueryEndpoint:
    """Tests for POST /query."""

    def test_paths(self, client: TestClient) -> None:
        response = client.post(
            "/query",
            json={"tokenIn": "USDe", "tokenOut": WETH.lower(), "k": 1, "maxDepth": 3},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "paths"
        assert data["token_out"] == WETH
        assert [p["tokens"] for p in data["paths"]] == [[USDE, USDC, WETH]]
        assert data["paths"][0]["node_ids"] == [ETHENA_MINT_ID, UNIV3_USDC_WETH_ID]

    def test_k_zero_returns_union(self, client: TestClient) -> None:
        response = client.post(
            "/query", json={"tokenIn": "USDe", "tokenOut": WETH, "k": 0, "maxDepth": 2}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "union"
        assert [g["adapter"] for g in data["groups"]] == ["EthenaMint", "UniswapV3"]

    def test_snake_case_fields(self, client: TestClient) -> None:
        response = client.post(
            "/query",
            json={"token_in": "USDe", "token_out": WETH, "max_depth": 2, "mode": "union"},
        )
        assert response.status_code == 200
        assert response.json()["mode"] == "union"

    def test_no_route_is_ok(self, client: TestClient) -> None:
        response = client.post("/query", json={"tokenIn": "FOO", "tokenOut": "USDe"})
        assert response.status_code == 200
        assert response.json()["paths"] == []

    def test_unknown_token_returns_404(self, client: TestClient) -> None:
        response = client.post("/query", json={"tokenIn": "NOPE", "tokenOut": "USDe"})
        assert response.status_code == 404
        assert response.json()["detail"] == "TokenIn not found in graph: NOPE"

    def test_empty_token_returns_400(self, client: TestClient) -> None:
        response = client.post("/query", json={"tokenIn": "", "tokenOut": "USDe"})
        assert response.status_code == 400

    def test_invalid_depth_returns_422(self, client: TestClient) -> None:
        response = client.post(
            "/query", json={"tokenIn": "USDe", "tokenOut": "FOO", "maxDepth": 0}
        )
        assert response.status_code == 422

    def test_missing_token_field_returns_422(self, client: TestClient) -> None:
        response = client.post("/query", json={"tokenIn": "USDe"})
        assert response.status_code == 422

    def test_search_runs_off_the_event_loop(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        import pathfinder.api.endpoints as endpoints

        threads: list[str] = []

        def recording_run_query(*args, **kwargs):
            try:
                asyncio.get_running_loop()
                threads.append("event_loop")
            except RuntimeError:
                threads.append("worker")
            return run_query(*args, **kwargs)

        monkeypatch.setattr(endpoints, "run_query", recording_run_query)
        response = client.post(
            "/query", json={"tokenIn": "USDe", "tokenOut": WETH, "k": 0, "maxDepth": 3}
        )

        assert response.status_code == 200
        assert response.json()["mode"] == "union"
        assert threads == ["worker"]

    def test_query_errors_propagate_from_worker(self, client: TestClient) -> None:
        response = client.post("/query", json={"tokenIn": "USDe", "tokenOut": "NOPE"})
        assert response.status_code == 404
        assert response.json()["detail"] == "TokenOut not found in graph: NOPE"


class TestDatasetErrors:
    """Tests for dataset loading failures."""

    def test_missing_dataset_returns_500(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        import pathfinder.api.endpoints as endpoints

        monkeypatch.setattr(endpoints, "DATASET_PATH", str(tmp_path / "missing.json"))
        endpoints.get_default_finder.cache_clear()
        try:
            response = TestClient(app).get("/tokens")
        finally:
            endpoints.get_default_finder.cache_clear()

        assert response.status_code == 500
        assert "File not found" in response.json()["detail"]

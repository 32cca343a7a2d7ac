"""API endpoints for the pathfinder service."""

import asyncio
import os
from functools import lru_cache
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from pathfinder.constants import DEFAULT_DATASET, DEFAULT_K, DEFAULT_MAX_DEPTH
from pathfinder.errors import DatasetError, QueryError, TokenNotFoundError
from pathfinder.loader import load_graph
from pathfinder.models.report import PathsReport, TokensReport, UnionReport
from pathfinder.presenter import present_tokens
from pathfinder.query import QueryConfig, QueryMode, run_query
from pathfinder.routing.pathfinding import PathFinder

logger = structlog.get_logger()

router = APIRouter()

# Dataset served by this process, configurable via PATHFINDER_DATASET
DATASET_PATH = os.environ.get("PATHFINDER_DATASET", DEFAULT_DATASET)


class QueryRequest(BaseModel):
    """Body of POST /query."""

    token_in: str = Field(alias="tokenIn")
    token_out: str = Field(alias="tokenOut")
    k: int = Field(default=DEFAULT_K, ge=0)
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, alias="maxDepth")
    mode: QueryMode | None = None

    model_config = {"populate_by_name": True}


@lru_cache(maxsize=1)
def get_default_finder() -> PathFinder:
    """Load the dataset once and share its PathFinder across requests."""
    return PathFinder(load_graph(DATASET_PATH))


def get_finder() -> PathFinder:
    """Dependency provider for the PathFinder.

    Override this in tests to inject a graph:
        app.dependency_overrides[get_finder] = lambda: PathFinder(graph)

    Raises:
        HTTPException: 500 if the dataset cannot be loaded
    """
    try:
        return get_default_finder()
    except DatasetError as err:
        logger.error("dataset_error", path=DATASET_PATH, error=str(err))
        raise HTTPException(status_code=500, detail=str(err)) from err


@router.get("/tokens")
async def list_tokens(
    finder: Annotated[PathFinder, Depends(get_finder)],
) -> TokensReport:
    """List every token in the dataset, sorted."""
    return present_tokens(finder.graph)


@router.post("/query")
async def query(
    request: QueryRequest,
    finder: Annotated[PathFinder, Depends(get_finder)],
) -> PathsReport | UnionReport | TokensReport:
    """Run a path or union query.

    The search runs in the default executor: a union query can take
    exponential time and must not block the event loop.

    Error Handling:
        - Invalid request schema: 422 (Pydantic)
        - Token not in the dataset: 404, detail names the normalized token
        - Other query errors: 400
    """
    try:
        config = QueryConfig(
            token_in=request.token_in,
            token_out=request.token_out,
            k=request.k,
            max_depth=request.max_depth,
            mode=request.mode,
        )
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, run_query, finder.graph, config, finder)
    except TokenNotFoundError as err:
        logger.warning("token_not_found", token=err.token, role=err.role)
        raise HTTPException(status_code=404, detail=str(err)) from err
    except QueryError as err:
        raise HTTPException(status_code=400, detail=str(err)) from err

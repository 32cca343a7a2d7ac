"""FastAPI application for the pathfinder service."""

import os

import uvicorn
from fastapi import FastAPI

from pathfinder import __version__
from pathfinder.api.endpoints import router

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("PATHFINDER_HOST", "127.0.0.1")
PORT = int(os.environ.get("PATHFINDER_PORT", "8000"))
DEBUG = os.environ.get("PATHFINDER_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="Pool Pathfinder",
    description="Route discovery over liquidity-pool datasets",
    version=__version__,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - PATHFINDER_DATASET: Pool dataset JSON file (default: ./pools.json)
    - PATHFINDER_HOST: Host to bind to (default: 127.0.0.1)
    - PATHFINDER_PORT: Port to bind to (default: 8000)
    - PATHFINDER_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "pathfinder.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()

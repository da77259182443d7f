"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from taskcollect import __version__
from taskcollect.api.tasks import router as tasks_router
from taskcollect.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Log resolved configuration at startup for debugging."""
    s = get_settings()
    logger.info("TaskCollect starting, vault_path=%s, root_paths=%s", s.vault_path, s.root_paths)
    if not s.vault_path or not s.vault_path.exists():
        logger.error("Vault path not configured or missing; task APIs will return 503 errors")
    yield


app = FastAPI(
    title="TaskCollect",
    description="Day and week task lists collected from Markdown notes",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(tasks_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Return project information."""
    return {
        "name": "TaskCollect",
        "version": __version__,
        "description": "Day and week task lists collected from Markdown notes",
    }


@app.get("/health")
@app.get("/api/v1/health")
async def health() -> dict[str, Any]:
    """Health check endpoint with vault status."""
    s = get_settings()

    checks: dict[str, Any] = {"status": "ok"}
    if not s.vault_path or not s.vault_path.exists():
        checks["status"] = "error"
        checks["vault"] = "not configured or missing"
    else:
        checks["vault"] = "ok"
    return checks

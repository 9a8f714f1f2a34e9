import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from pharmacy.app_shell.config import get_settings
from pharmacy.app_shell.context import AppContext
from pharmacy.services.bootstrap import bootstrap_system

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Fail fast: a half-initialised store must not serve traffic
    try:
        ctx = AppContext.from_settings(settings)
        bootstrap_system(ctx)
    except Exception:
        logger.critical("Startup failed", exc_info=True)
        raise

    app.state.ctx = ctx
    yield


app = FastAPI(
    title="Pharmacy API",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}

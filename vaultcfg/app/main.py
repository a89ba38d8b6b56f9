"""
vaultcfg - Secret Engine Configuration Service

FastAPI application entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from vaultcfg import __version__
from vaultcfg.app.api import configuration_router
from vaultcfg.app.dependencies import get_settings, initialize_services, shutdown_services
from vaultcfg.engines import CONFIGURABLE_SECRET_ENGINES

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    logger.info("Starting vaultcfg services...")
    try:
        await initialize_services()
        logger.info("vaultcfg services initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}", exc_info=True)
        raise

    yield

    logger.info("Shutting down vaultcfg services...")
    try:
        await shutdown_services()
        logger.info("vaultcfg services shut down successfully")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}", exc_info=True)


settings = get_settings()

app = FastAPI(
    title="vaultcfg",
    description="Resolve and provision configuration records for Vault secret engines",
    version=__version__,
    lifespan=lifespan,
    debug=settings.debug,
)

app.include_router(configuration_router, prefix="/api/v1")


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": __version__,
        "configurable_engines": sorted(CONFIGURABLE_SECRET_ENGINES),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "vaultcfg.app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )

"""FastAPI application entrypoint with lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from psiproxy.api import router
from psiproxy.config.settings import get_config

# Configure logging
logging.basicConfig(
    level=get_config().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    config = get_config()
    logger.info("Starting up PSI proxy...")
    logger.info(
        f"Upstream: {config.psi_api_url} "
        f"(server key: {'yes' if config.psi_api_key else 'no'}, "
        f"timeout: {config.request_timeout or 'none'})"
    )

    try:
        yield
    finally:
        logger.info("PSI proxy shutdown complete")


# Every path except /psi answers "Hello World", so the docs routes stay off.
app = FastAPI(
    title="PSI Proxy",
    description="Flattens PageSpeed Insights reports into display-friendly summaries",
    version="0.1.0",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.include_router(router)

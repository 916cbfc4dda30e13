"""Main server application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from portalgrid.api import router as api_router
from portalgrid.core.config import get_server_settings
from portalgrid.core.registry import get_all_services

settings = get_server_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application lifespan events.

    Logs the effective configuration and registered services on startup and a
    notice on shutdown.
    """
    logger.info(
        "Server configured with host={}, port={}, default grid cols={}",
        settings.api_host,
        settings.api_port,
        settings.default_cols,
    )
    logger.info(f"Registered services: {sorted(get_all_services())}")

    yield  # Server is running

    logger.info("Server shutting down...")


app = FastAPI(
    title="Portal Grid API",
    description="Layout storage and collision resolution for the portal widget grid",
    version="0.1.0",
    lifespan=lifespan,
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,  # Cache preflight requests for 1 hour
)

app.include_router(api_router, prefix="/api")

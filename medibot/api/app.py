"""FastAPI application factory for hosting the chat screen.

The chat backend itself is a separate service; this app only serves the
NiceGUI pages (mounted in ``medibot.main``) and a health probe.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from medibot.api.config import get_client_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log startup and shutdown of the host app.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info(f"Starting MediBot chat host (backend: {get_client_config().api_base_url})")
    yield
    logger.info("Shutting down MediBot chat host...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI host application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="MediBot Chat",
        description=(
            "Web client for the MediBot assistant. Renders the chat screen, keeps the "
            "current session and its messages in per-browser storage, and talks to the "
            "MediBot chat backend for replies and session history."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "medibot-chat"}

    return application

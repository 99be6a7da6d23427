"""FastAPI host application.

Serves the health endpoint and carries the NiceGUI pages once they are
mounted by the entry point.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from insight import __version__
from insight.client.api_client import close_api_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Closes the shared remote API client on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting Strategic Insight Dashboard...")
    yield
    await close_api_client()
    logger.info("Shutting down Strategic Insight Dashboard...")


def create_app() -> FastAPI:
    """Create and configure the host application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Strategic Insight Dashboard",
        description=(
            "Web front-end for uploading business documents and asking an AI "
            "questions about them. Documents, chat history and analysis are "
            "served by a remote document API."
        ),
        version=__version__,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "insight-dashboard", "version": __version__}

    return application


app = create_app()

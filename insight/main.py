"""Main application entry point.

Runs FastAPI with the NiceGUI dashboard mounted on the same server.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Application entry point.

    FastAPI serves /health, NiceGUI serves the landing page and dashboard.
    """
    import uvicorn
    from nicegui import ui

    from insight.api.app import create_app
    from insight.config import get_client_config
    from insight.ui import dashboard_page, landing_page  # noqa: F401 - Registers the pages

    config = get_client_config()
    app = create_app()

    ui.run_with(
        app,
        title="Strategic Insight Dashboard",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "insight-dashboard-secret"),
    )

    port = int(os.getenv("PORT", "3000"))
    logger.info(f"Remote document API: {config.api_base_url}")
    logger.info(f"Dashboard available at http://localhost:{port}/dashboard")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()

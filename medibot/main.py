"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the chat interface.
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
    """Run FastAPI with NiceGUI mounted on the same server.

    The chat backend is a separate service reached through MEDIBOT_API_URL,
    so the host defaults to port 8080.
    """
    import uvicorn
    from nicegui import ui

    from medibot.api.app import create_app
    from medibot.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()
    port = int(os.getenv("PORT", "8080"))

    # Mount NiceGUI onto FastAPI; storage_secret enables per-browser user storage
    ui.run_with(
        app,
        title="MediBot",
        favicon="🩺",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "medibot-chat-secret"),
    )

    logger.info(f"Starting MediBot chat on http://localhost:{port}/chatbot")
    logger.info(f"Health check available at http://localhost:{port}/health")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()

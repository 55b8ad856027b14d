"""HTTP layer for the chat screen.

Endpoints consumed from the chat backend:
    - GET /api/sessions: Past sessions of the user
    - GET /api/chat/{id}: Messages of one session
    - POST /api/chatbot: Send a message and receive the reply

Endpoints served by the host app:
    - GET /health: Service health status
"""

from medibot.api.app import create_app
from medibot.api.client import (
    BackendClient,
    BackendError,
    ChatSendError,
    HistoryLoadError,
    SessionLoadError,
)
from medibot.api.config import ClientConfig, get_client_config

__all__ = [
    "BackendClient",
    "BackendError",
    "ChatSendError",
    "ClientConfig",
    "HistoryLoadError",
    "SessionLoadError",
    "create_app",
    "get_client_config",
]

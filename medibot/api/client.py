"""HTTP client for the MediBot chat backend.

Endpoints consumed:
    - GET  /api/sessions?userId=...         session list for the history panel
    - GET  /api/chat/{sessionId}?userId=... full history of one session
    - POST /api/chatbot                     send a message, receive the reply

Every failure (transport error, non-2xx status, undecodable body) is raised
as a BackendError subclass so callers handle one family of exceptions.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from medibot.api.config import ClientConfig, get_client_config
from medibot.models.schemas import ChatReply, ChatRequest, Message, SessionSummary
from medibot.parsing.normalize import PayloadError, normalize_messages, normalize_sessions

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Base class for chat backend failures."""

    pass


class HistoryLoadError(BackendError):
    """Raised when the session list cannot be fetched."""

    pass


class SessionLoadError(BackendError):
    """Raised when one session's messages cannot be fetched."""

    pass


class ChatSendError(BackendError):
    """Raised when a chat message gets no usable reply."""

    pass


class BackendClient:
    """Async client for the chat backend.

    A fresh ``httpx.AsyncClient`` is opened per call; the screen issues at
    most a handful of requests per user action.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport, e.g. a MockTransport in tests.
        """
        self._config = config or get_client_config()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.api_base_url,
            timeout=self._config.request_timeout,
            transport=self._transport,
        )

    async def _request_json(
        self,
        method: str,
        url: str,
        error_cls: type[BackendError],
        **kwargs: Any,
    ) -> Any:
        async with self._client() as client:
            try:
                response = await client.request(method, url, **kwargs)
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as e:
                raise error_cls(f"HTTP {e.response.status_code} from {url}") from e
            except httpx.RequestError as e:
                raise error_cls(f"Connection failed: {e}") from e
            except ValueError as e:
                # json.JSONDecodeError is a ValueError
                raise error_cls(f"Invalid JSON from {url}: {e}") from e

    async def fetch_sessions(self, user_id: str) -> list[SessionSummary]:
        """Fetch the user's past sessions.

        Args:
            user_id: Authenticated user identifier (email).

        Returns:
            Normalized summaries in backend order.

        Raises:
            HistoryLoadError: On transport, status or payload failure.
        """
        payload = await self._request_json(
            "GET", "/api/sessions", HistoryLoadError, params={"userId": user_id}
        )
        try:
            sessions = normalize_sessions(payload)
        except PayloadError as e:
            raise HistoryLoadError(str(e)) from e

        logger.debug(f"Fetched {len(sessions)} sessions for {user_id}")
        return sessions

    async def load_session(self, session_id: str, user_id: str) -> list[Message]:
        """Fetch the full message history of one session.

        Raises:
            SessionLoadError: On transport, status or payload failure.
        """
        payload = await self._request_json(
            "GET",
            f"/api/chat/{quote(session_id, safe='')}",
            SessionLoadError,
            params={"userId": user_id},
        )
        try:
            return normalize_messages(payload)
        except (PayloadError, ValidationError) as e:
            raise SessionLoadError(str(e)) from e

    async def send_message(self, request: ChatRequest) -> str:
        """Send one user message and return the bot reply text.

        Raises:
            ChatSendError: On transport, status or payload failure.
        """
        payload = await self._request_json(
            "POST",
            "/api/chatbot",
            ChatSendError,
            json=request.model_dump(by_alias=True),
        )
        try:
            reply = ChatReply.model_validate(payload)
        except ValidationError as e:
            raise ChatSendError(f"Unexpected reply shape: {e}") from e
        return reply.response

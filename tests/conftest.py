"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - store: In-memory storage with a signed-in user
    - anonymous_store: In-memory storage without a user
    - config: Client configuration pointing at the fake backend
    - backend: Fake chat backend served through httpx.MockTransport
    - backend_client: BackendClient wired to the fake backend
    - controller: ChatController over store + fake backend
    - async_client: HTTPX client for the host app
"""

import asyncio
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from medibot.api.app import create_app
from medibot.api.client import BackendClient
from medibot.api.config import ClientConfig
from medibot.chat.controller import ChatController, ChatHooks
from medibot.models.schemas import ShareOutcome
from medibot.storage.local_storage import EMAIL_KEY, NAME_KEY, InMemoryStore

TEST_USER = "patient@example.com"


class FakeBackend:
    """Stand-in for the MediBot chat backend.

    Routes are keyed "sessions", "chat" and "chatbot". Set ``status[key]`` to
    fail a route, or ``gates[key]`` to an asyncio.Event to hold it open.
    """

    def __init__(self) -> None:
        self.sessions: Any = []
        self.chats: dict[str, Any] = {}
        self.reply = "Please drink plenty of water."
        self.status: dict[str, int] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.started: dict[str, asyncio.Event] = {}
        self.requests: list[httpx.Request] = []

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def count(self, key: str) -> int:
        return sum(1 for request in self.requests if self._route(request) == key)

    @staticmethod
    def _route(request: httpx.Request) -> str:
        path = request.url.path
        if path == "/api/sessions":
            return "sessions"
        if path == "/api/chatbot":
            return "chatbot"
        if path.startswith("/api/chat/"):
            return "chat"
        return "unknown"

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = self._route(request)

        self.started.setdefault(key, asyncio.Event()).set()
        if key in self.gates:
            await self.gates[key].wait()

        status = self.status.get(key, 200)
        if status != 200:
            return httpx.Response(status, json={"detail": "backend failure"})

        if key == "sessions":
            return httpx.Response(200, json=self.sessions)
        if key == "chat":
            session_id = request.url.path.removeprefix("/api/chat/")
            if session_id not in self.chats:
                return httpx.Response(404, json={"detail": "not found"})
            return httpx.Response(200, json=self.chats[session_id])
        if key == "chatbot":
            return httpx.Response(200, json={"response": self.reply})
        return httpx.Response(404)


class RecordingHooks(ChatHooks):
    """ChatHooks that remember every navigation, notice and share."""

    def __init__(self, share_outcome: ShareOutcome = ShareOutcome.SHARED) -> None:
        self.paths: list[str] = []
        self.notices: list[str] = []
        self.shared: list[tuple[str, str]] = []
        self.changes = 0
        self.share_outcome = share_outcome
        super().__init__(
            navigate=self.paths.append,
            notify=self.notices.append,
            share=self._share,
            on_change=self._on_change,
        )

    async def _share(self, title: str, text: str) -> ShareOutcome:
        self.shared.append((title, text))
        return self.share_outcome

    def _on_change(self) -> None:
        self.changes += 1


@pytest.fixture
def store() -> InMemoryStore:
    """Storage as left by the login flow for a signed-in user."""
    return InMemoryStore({NAME_KEY: "Alex", EMAIL_KEY: TEST_USER})


@pytest.fixture
def anonymous_store() -> InMemoryStore:
    """Storage with no signed-in user."""
    return InMemoryStore()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_base_url="http://backend.test", request_timeout=5.0)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def backend_client(config: ClientConfig, backend: FakeBackend) -> BackendClient:
    return BackendClient(config=config, transport=backend.transport())


@pytest.fixture
def hooks() -> RecordingHooks:
    return RecordingHooks()


@pytest.fixture
def controller(
    store: InMemoryStore,
    backend_client: BackendClient,
    config: ClientConfig,
    hooks: RecordingHooks,
) -> ChatController:
    """Controller restored from ``store`` and ready for user actions."""
    chat = ChatController(store, client=backend_client, config=config, hooks=hooks)
    chat.init()
    return chat


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for the host app.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

"""Persistence layer for the chat screen.

Replaces ad hoc browser storage with an injected ``get``/``set`` interface,
so the chat components can run against an in-memory fake in tests.

Implementations:
    - InMemoryStore: process-local dict
    - MappingStore: adapter over NiceGUI per-browser user storage
"""

from medibot.storage.local_storage import (
    EMAIL_KEY,
    MESSAGES_KEY,
    NAME_KEY,
    SESSION_ID_KEY,
    SESSION_TITLE_KEY,
    InMemoryStore,
    KeyValueStore,
    MappingStore,
    StorageError,
)

__all__ = [
    "EMAIL_KEY",
    "MESSAGES_KEY",
    "NAME_KEY",
    "SESSION_ID_KEY",
    "SESSION_TITLE_KEY",
    "InMemoryStore",
    "KeyValueStore",
    "MappingStore",
    "StorageError",
]

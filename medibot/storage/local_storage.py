"""Durable key/value storage for chat state.

String keys map to string values, mirroring browser local storage. Values
that hold structured data are JSON-encoded by the caller.
"""

from collections.abc import MutableMapping
from typing import Any, Protocol, runtime_checkable

# Keys written by the login flow; read-only here
NAME_KEY = "Name"
EMAIL_KEY = "Email"

# Keys owned by the chat screen
MESSAGES_KEY = "chatMessages"
SESSION_ID_KEY = "chatSessionId"
SESSION_TITLE_KEY = "chatSessionTitle"


class StorageError(Exception):
    """Raised when a value cannot be written to the backing store."""

    pass


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal persistence interface used by the chat components."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryStore:
    """Process-local store. Used in tests and when no durable store is configured."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class MappingStore:
    """Adapter over any mutable mapping, e.g. NiceGUI's ``app.storage.user``.

    NiceGUI persists the mapping per browser, which gives the same lifetime
    as local storage in the browser.
    """

    def __init__(self, mapping: MutableMapping[str, Any]) -> None:
        self._mapping = mapping

    def get(self, key: str) -> str | None:
        value = self._mapping.get(key)
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    def set(self, key: str, value: str) -> None:
        try:
            self._mapping[key] = value
        except (OSError, RuntimeError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to store {key}: {e}") from e

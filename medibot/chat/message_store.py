"""Ordered chat turns for the current session, persisted as JSON.

The store is never empty: whenever there is nothing to show, it holds the
greeting turn instead.
"""

import logging

from pydantic import TypeAdapter, ValidationError

from medibot.models.schemas import Message, Sender
from medibot.storage.local_storage import MESSAGES_KEY, KeyValueStore

logger = logging.getLogger(__name__)

_MESSAGES = TypeAdapter(list[Message])


def greeting(name: str, bot_name: str = "MediBot") -> Message:
    """Opening bot turn addressed to ``name``."""
    return Message(text=f"Hi {name}, I am {bot_name} 😊", sender=Sender.BOT)


class MessageStore:
    """Append-only list of turns, replaced wholesale when a session loads.

    Every mutation writes the full list back to storage.
    """

    def __init__(self, store: KeyValueStore, name: str, bot_name: str = "MediBot") -> None:
        """Initialize the message store.

        Args:
            store: Backing key/value storage.
            name: User display name for the greeting.
            bot_name: Assistant name for the greeting.
        """
        self._store = store
        self._name = name
        self._bot_name = bot_name
        self._messages: list[Message] = []

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def user_message_count(self) -> int:
        return sum(1 for message in self._messages if message.is_user)

    def greeting(self) -> Message:
        return greeting(self._name, self._bot_name)

    def _load(self) -> list[Message] | None:
        raw = self._store.get(MESSAGES_KEY)
        if raw is None:
            return None
        try:
            return _MESSAGES.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable persisted messages: {e}")
            return None

    def _persist(self) -> None:
        self._store.set(MESSAGES_KEY, _MESSAGES.dump_json(self._messages).decode("utf-8"))

    def init(self) -> list[Message]:
        """Load persisted turns, or start with the greeting and persist it."""
        stored = self._load()
        if stored:
            self._messages = stored
        else:
            self._messages = [self.greeting()]
            self._persist()
        return self.messages

    def append(self, message: Message) -> None:
        self._messages.append(message)
        self._persist()

    def replace_all(self, messages: list[Message]) -> None:
        """Replace every turn; an empty list becomes the greeting."""
        self._messages = list(messages) if messages else [self.greeting()]
        self._persist()

    def reset(self) -> None:
        self.replace_all([])

"""Chat screen state: session identity, messages and the send/load flow.

Responsibilities:
    - Current session id and title with persistence across reloads
    - Ordered message list with greeting fallback
    - One in-flight request at a time (send or history load)
    - Error banner, history panel, sidebar and share handling

Keeps all screen logic out of the NiceGUI layer so it can be tested against
in-memory storage and a fake backend.
"""

from medibot.chat.controller import ChatController, ChatHooks
from medibot.chat.message_store import MessageStore, greeting
from medibot.chat.profile import AuthRequired, UserProfile
from medibot.chat.session_tracker import SessionTracker, derive_title

__all__ = [
    "AuthRequired",
    "ChatController",
    "ChatHooks",
    "MessageStore",
    "SessionTracker",
    "UserProfile",
    "derive_title",
    "greeting",
]

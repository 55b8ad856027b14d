"""Payload normalization for the chat backend.

Turns heterogeneous backend responses into the display models used by the UI.

Responsibilities:
    - Session list entries with id/sessionId and timestamp/createdAt variants
    - Message history as {messages: [...]} or a bare array of role/content records
    - Human readable dates and synthesized titles
"""

from medibot.parsing.normalize import (
    PayloadError,
    normalize_messages,
    normalize_session,
    normalize_sessions,
)

__all__ = ["PayloadError", "normalize_messages", "normalize_session", "normalize_sessions"]

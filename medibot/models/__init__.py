"""Pydantic models for chat state and backend payloads.

Provides type safety and validation at the boundary with the chat backend
and with durable storage.

Models:
    - Message: Individual turn in the conversation
    - Session: The conversation currently on screen
    - SessionSummary: Entry in the history panel
    - ChatRequest: Outgoing chat request payload
    - ChatReply: Chat backend answer
"""

from medibot.models.schemas import (
    DEFAULT_TITLE,
    ChatReply,
    ChatRequest,
    ChatState,
    Message,
    Sender,
    Session,
    SessionSummary,
    ShareOutcome,
)

__all__ = [
    "DEFAULT_TITLE",
    "ChatReply",
    "ChatRequest",
    "ChatState",
    "Message",
    "Sender",
    "Session",
    "SessionSummary",
    "ShareOutcome",
]

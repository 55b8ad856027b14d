from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_TITLE = "New Chat"


class Sender(str, Enum):
    """Originator of a chat turn."""

    USER = "user"
    BOT = "bot"


class ChatState(str, Enum):
    """Operation currently in flight for the chat screen."""

    IDLE = "idle"
    SENDING = "sending"
    LOADING_HISTORY = "loading_history"


class ShareOutcome(str, Enum):
    """Result reported by the platform share sheet."""

    SHARED = "shared"
    FAILED = "failed"
    UNSUPPORTED = "unsupported"


class Message(BaseModel):
    """A single chat turn.

    Attributes:
        text: The utterance.
        sender: Who produced it.
    """

    text: str
    sender: Sender

    @property
    def is_user(self) -> bool:
        return self.sender is Sender.USER


class Session(BaseModel):
    """The conversation currently shown on screen.

    Attributes:
        id: Stable session token.
        title: Display title, "New Chat" until the first user message.
        created_at: When this session became current in this process. Kept in
            memory only: the store holds just the id and title, so a reload
            stamps a new time.
    """

    id: str = Field(..., min_length=1)
    title: str = DEFAULT_TITLE
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class SessionSummary(BaseModel):
    """One entry of the history panel.

    Attributes:
        id: Session identifier.
        title: Stored title or a title synthesized from the date.
        date: Human readable creation date.
        preview: Short preview text.
    """

    id: str
    title: str
    date: str
    preview: str


class ChatRequest(BaseModel):
    """Request payload for POST /api/chatbot.

    Serialized with camelCase keys: userId, message, sessionId, title.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    session_id: str
    title: str

    @field_validator("message")
    @classmethod
    def reject_blank_message(cls, v: str) -> str:
        """Reject whitespace-only messages without altering the text."""
        if not v.strip():
            raise ValueError("message must not be blank")
        return v


class ChatReply(BaseModel):
    """Response from POST /api/chatbot."""

    response: str

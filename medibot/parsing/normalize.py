"""Normalization of chat backend payloads.

The backend has shipped two field-name variants per entity. Everything that
reaches the UI passes through here so the precedence rules live in one place:

    - session id: ``id`` then ``sessionId``
    - timestamp: ``timestamp`` then ``createdAt``
    - message text: ``content`` then ``text``
    - message sender: ``sender`` when valid, else derived from ``role``
"""

import logging
from datetime import UTC, datetime
from typing import Any

from medibot.models.schemas import Message, Sender, SessionSummary

logger = logging.getLogger(__name__)

UNKNOWN_DATE = "Unknown date"
DEFAULT_PREVIEW = "Click to view chat"


class PayloadError(Exception):
    """Raised when a backend payload has an unusable shape."""

    pass


def _first_present(record: dict[str, Any], *keys: str) -> Any:
    """Return the first truthy value among ``keys``, or None."""
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an epoch-milliseconds number or an ISO-8601 string.

    Args:
        value: Raw timestamp from the backend.

    Returns:
        Aware UTC datetime, or None if the value is missing or unparseable.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            value = float(stripped)
        except ValueError:
            try:
                parsed = datetime.fromisoformat(stripped.replace("Z", "+00:00"))
            except ValueError:
                return None
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=UTC)
            return parsed.astimezone(UTC)

    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None

    return None


def format_date(moment: datetime | None) -> str:
    """Format a date as M/D/YYYY, the way the history panel displays it."""
    if moment is None:
        return UNKNOWN_DATE
    return f"{moment.month}/{moment.day}/{moment.year}"


def normalize_session(record: dict[str, Any]) -> SessionSummary:
    """Convert one backend session object into a SessionSummary.

    Args:
        record: Session object from GET /api/sessions.

    Returns:
        Normalized summary for the history panel.

    Raises:
        PayloadError: If the record is not an object or carries no id.
    """
    if not isinstance(record, dict):
        raise PayloadError(f"Session entry must be an object, got {type(record).__name__}")

    session_id = _first_present(record, "id", "sessionId")
    if session_id is None:
        raise PayloadError("Session entry has neither 'id' nor 'sessionId'")

    date = format_date(parse_timestamp(_first_present(record, "timestamp", "createdAt")))
    title = record.get("title") or f"Chat {date}"
    preview = record.get("preview") or DEFAULT_PREVIEW

    return SessionSummary(
        id=str(session_id),
        title=str(title),
        date=date,
        preview=str(preview),
    )


def normalize_sessions(payload: Any) -> list[SessionSummary]:
    """Normalize the full GET /api/sessions body.

    Entries without an id are skipped with a warning rather than failing the
    whole list.

    Raises:
        PayloadError: If the body is not a JSON array.
    """
    if not isinstance(payload, list):
        raise PayloadError("Expected a JSON array of sessions")

    summaries: list[SessionSummary] = []
    for i, record in enumerate(payload):
        try:
            summaries.append(normalize_session(record))
        except PayloadError as e:
            logger.warning(f"Skipping session entry {i}: {e}")
    return summaries


def normalize_message(record: dict[str, Any]) -> Message:
    """Convert one stored turn into a Message.

    Accepts both ``{text, sender}`` and ``{role, content}`` records.
    ``role == "user"`` maps to the user; any other role maps to the bot.

    Raises:
        PayloadError: If the record is not an object.
    """
    if not isinstance(record, dict):
        raise PayloadError(f"Message entry must be an object, got {type(record).__name__}")

    text = _first_present(record, "content", "text") or ""

    sender_value = record.get("sender")
    if sender_value in (Sender.USER.value, Sender.BOT.value):
        sender = Sender(sender_value)
    else:
        sender = Sender.USER if record.get("role") == "user" else Sender.BOT

    return Message(text=str(text), sender=sender)


def normalize_messages(payload: Any) -> list[Message]:
    """Normalize the GET /api/chat/{sessionId} body.

    Args:
        payload: Either ``{"messages": [...]}`` or a bare array of records.

    Returns:
        Messages in payload order, possibly empty.

    Raises:
        PayloadError: If the body matches neither shape.
    """
    if isinstance(payload, dict) and isinstance(payload.get("messages"), list):
        records = payload["messages"]
    elif isinstance(payload, list):
        records = payload
    else:
        raise PayloadError("Expected {'messages': [...]} or a JSON array of messages")

    return [normalize_message(record) for record in records]

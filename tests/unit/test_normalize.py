"""Unit tests for backend payload normalization."""

import pytest
import pytest_check as check

from medibot.models.schemas import Message, Sender
from medibot.parsing.normalize import (
    DEFAULT_PREVIEW,
    UNKNOWN_DATE,
    PayloadError,
    format_date,
    normalize_messages,
    normalize_session,
    normalize_sessions,
    parse_timestamp,
)


class TestNormalizeSession:
    """Tests for session list entries."""

    def test_both_field_variants_normalize_equally(self) -> None:
        """sessionId/createdAt and id/timestamp produce the same summary."""
        legacy = normalize_session({"sessionId": "s1", "createdAt": 1700000000000})
        current = normalize_session({"id": "s1", "timestamp": 1700000000000})

        assert legacy == current
        check.equal(current.id, "s1")
        check.equal(current.date, "11/14/2023")

    def test_id_takes_precedence_over_session_id(self) -> None:
        """id wins when both id fields are present."""
        summary = normalize_session({"id": "primary", "sessionId": "secondary"})

        assert summary.id == "primary"

    def test_empty_id_falls_back_to_session_id(self) -> None:
        """A blank id is treated as missing."""
        summary = normalize_session({"id": "", "sessionId": "fallback"})

        assert summary.id == "fallback"

    def test_timestamp_takes_precedence_over_created_at(self) -> None:
        """timestamp wins when both time fields are present."""
        summary = normalize_session(
            {"id": "s1", "timestamp": 1700000000000, "createdAt": "2020-01-02T00:00:00Z"}
        )

        assert summary.date == "11/14/2023"

    def test_missing_title_is_synthesized_from_date(self) -> None:
        """Untitled sessions are named after their date."""
        summary = normalize_session({"id": "s1", "createdAt": "2024-03-05T10:00:00Z"})

        check.equal(summary.title, "Chat 3/5/2024")
        check.equal(summary.preview, DEFAULT_PREVIEW)

    def test_stored_title_and_preview_are_kept(self) -> None:
        """Backend title and preview pass through unchanged."""
        summary = normalize_session(
            {"id": "s1", "title": "Headache", "preview": "I have a headache", "timestamp": 0}
        )

        check.equal(summary.title, "Headache")
        check.equal(summary.preview, "I have a headache")

    def test_missing_timestamp_yields_unknown_date(self) -> None:
        """No timestamp at all still produces a displayable summary."""
        summary = normalize_session({"id": "s1"})

        check.equal(summary.date, UNKNOWN_DATE)
        check.equal(summary.title, f"Chat {UNKNOWN_DATE}")

    def test_rejects_entry_without_id(self) -> None:
        """An entry with neither id field is unusable."""
        with pytest.raises(PayloadError, match="neither"):
            normalize_session({"title": "orphan"})

    def test_rejects_non_object_entry(self) -> None:
        with pytest.raises(PayloadError, match="must be an object"):
            normalize_session("s1")  # type: ignore[arg-type]


class TestNormalizeSessions:
    """Tests for the full session list body."""

    def test_skips_unusable_entries(self) -> None:
        """Bad entries are dropped, good ones kept in order."""
        summaries = normalize_sessions([{"id": "a"}, {"title": "no id"}, {"sessionId": "b"}])

        assert [s.id for s in summaries] == ["a", "b"]

    def test_rejects_non_array_body(self) -> None:
        with pytest.raises(PayloadError, match="JSON array"):
            normalize_sessions({"sessions": []})


class TestParseTimestamp:
    """Tests for timestamp parsing."""

    def test_epoch_milliseconds(self) -> None:
        moment = parse_timestamp(1700000000000)

        assert moment is not None
        assert (moment.year, moment.month, moment.day) == (2023, 11, 14)

    def test_numeric_string_is_epoch_milliseconds(self) -> None:
        assert parse_timestamp("1700000000000") == parse_timestamp(1700000000000)

    def test_iso_string_without_timezone_is_utc(self) -> None:
        moment = parse_timestamp("2024-03-05T23:30:00")

        assert format_date(moment) == "3/5/2024"

    def test_garbage_is_none(self) -> None:
        check.is_none(parse_timestamp("yesterday"))
        check.is_none(parse_timestamp(None))
        check.is_none(parse_timestamp(True))
        check.is_none(parse_timestamp({"seconds": 1}))


class TestNormalizeMessages:
    """Tests for session message payloads."""

    def test_messages_wrapper_shape(self) -> None:
        """{messages: [...]} of text/sender records passes through."""
        payload = {
            "messages": [
                {"text": "Hi", "sender": "user"},
                {"text": "Hello!", "sender": "bot"},
            ]
        }

        assert normalize_messages(payload) == [
            Message(text="Hi", sender=Sender.USER),
            Message(text="Hello!", sender=Sender.BOT),
        ]

    def test_bare_array_of_role_content_records(self) -> None:
        """role 'user' maps to user, every other role maps to bot."""
        payload = [
            {"role": "user", "content": "I feel dizzy"},
            {"role": "assistant", "content": "Sit down for a moment."},
            {"role": "system", "content": "note"},
        ]

        senders = [m.sender for m in normalize_messages(payload)]

        assert senders == [Sender.USER, Sender.BOT, Sender.BOT]

    def test_content_takes_precedence_over_text(self) -> None:
        messages = normalize_messages([{"role": "user", "content": "new", "text": "old"}])

        assert messages[0].text == "new"

    def test_wrapped_role_content_records_are_mapped(self) -> None:
        """The wrapper shape may also carry role/content records."""
        messages = normalize_messages({"messages": [{"role": "user", "content": "Hi"}]})

        assert messages == [Message(text="Hi", sender=Sender.USER)]

    def test_empty_payloads(self) -> None:
        check.equal(normalize_messages([]), [])
        check.equal(normalize_messages({"messages": []}), [])

    def test_rejects_unknown_shape(self) -> None:
        with pytest.raises(PayloadError, match="Expected"):
            normalize_messages({"history": []})

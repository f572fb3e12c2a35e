"""Unit tests for the normalization pipeline.

Run with: pytest tests/test_normalization.py -v
"""

import re
import uuid

import pytest

from events.domain import EventId, EventMode
from events.domain.errors import InvalidFormatError, ValidationError
from events.domain.normalization import (
    generate_slug,
    is_valid_email,
    normalize_date,
    normalize_email,
    normalize_event_fields,
    normalize_time,
)

SLUG_SHAPE = re.compile(r"[a-z0-9]+(-[a-z0-9]+)*")

EVENT_ID = EventId(uuid.UUID("5f0c2a4e-9d7b-4d4b-8f43-2d3f8f5b9a10"))


class TestGenerateSlug:
    """Tests for generate_slug."""

    @pytest.mark.parametrize(
        "title, expected",
        [
            ("React Summit 2025", "react-summit-2025"),
            ("  Hello   World  ", "hello-world"),
            ("C++ & Rust -- Meetup", "c-rust-meetup"),
            ("Node.js World Conference!", "nodejs-world-conference"),
            ("Café Déjà Vu", "cafe-deja-vu"),
            ("snake_case__title", "snake-case-title"),
            ("Tech Meetup: Frontend Masters", "tech-meetup-frontend-masters"),
        ],
    )
    def test_known_titles(self, title, expected):
        assert generate_slug(title) == expected

    @pytest.mark.parametrize(
        "title",
        [
            "DevOps Conference 2025",
            "---leading and trailing---",
            "Tabs\tand\nnewlines",
            "UPPER lower MiXeD",
            "emoji 🎉 party",
            "東京 Tech Week",
            "a - - b",
            "100% Web_Dev!!",
        ],
    )
    def test_output_is_lowercase_hyphenated_ascii(self, title):
        """Slug only holds [a-z0-9-] and never has consecutive hyphens."""
        slug = generate_slug(title)
        assert SLUG_SHAPE.fullmatch(slug)
        assert "--" not in slug

    def test_symbols_only_title_gives_empty_slug(self):
        assert generate_slug("!!! ???") == ""

    def test_is_deterministic(self):
        assert generate_slug("Same Title") == generate_slug("Same Title")


class TestNormalizeDate:
    """Tests for normalize_date."""

    @pytest.mark.parametrize(
        "value",
        [
            "2025-06-02",
            "2025-6-2",
            "June 2, 2025",
            "Jun 2, 2025",
            "2 June 2025",
            "06/02/2025",
            "2025/06/02",
            "2025-06-02T10:00:00",
            "2025-06-02T10:00:00Z",
        ],
    )
    def test_canonical_form(self, value):
        assert normalize_date(value) == "2025-06-02"

    def test_offset_does_not_shift_calendar_date(self):
        """A late-evening datetime with an offset keeps the submitted date."""
        assert normalize_date("2025-06-02T23:30:00-05:00") == "2025-06-02"

    @pytest.mark.parametrize("value", ["not-a-date", "", "2025-13-01", "2025-02-30", "tomorrow"])
    def test_unparseable_raises(self, value):
        with pytest.raises(InvalidFormatError):
            normalize_date(value)


class TestNormalizeTime:
    """Tests for normalize_time."""

    @pytest.mark.parametrize("value", ["00:00", "9:05", "09:05", "12:30", "23:59"])
    def test_valid_time_returned_unchanged(self, value):
        assert normalize_time(value) == value

    @pytest.mark.parametrize("value", ["25:00", "12:60", "24:00", "9:5", "noon", "12:00:00", "12:00\n"])
    def test_invalid_time_raises(self, value):
        with pytest.raises(InvalidFormatError):
            normalize_time(value)


class TestEmail:
    """Tests for email validation and normalization."""

    @pytest.mark.parametrize("value", ["user@example.com", "first.last+tag@sub.domain.io"])
    def test_valid(self, value):
        assert is_valid_email(value)

    @pytest.mark.parametrize(
        "value",
        ["plainaddress", "user@domain", "user @example.com", "user@@example.com", "@example.com"],
    )
    def test_invalid(self, value):
        assert not is_valid_email(value)

    def test_normalize_trims_and_lowercases(self):
        assert normalize_email("  Jane.Doe@Example.COM ") == "jane.doe@example.com"

    @pytest.mark.parametrize("value", [None, "", "   ", "jane@", 42])
    def test_normalize_rejects(self, value):
        with pytest.raises(ValidationError) as info:
            normalize_email(value)
        assert "email" in info.value.as_dict()


class TestNormalizeEventFields:
    """Tests for the full event normalization pipeline."""

    def test_produces_canonical_record(self, event_fields):
        event_fields.update(
            title="  React Summit 2025 ",
            date="June 2, 2025",
            mode="Hybrid",
            tags=["react", " react ", "frontend", ""],
        )

        normalized = normalize_event_fields(event_fields, EVENT_ID)

        assert normalized.title == "React Summit 2025"
        assert normalized.slug == "react-summit-2025"
        assert normalized.date == "2025-06-02"
        assert normalized.time == "09:00"
        assert normalized.mode is EventMode.HYBRID
        assert normalized.tags == ("react", "frontend")
        assert normalized.agenda == ("Opening keynote", "React internals", "Closing panel")

    def test_collects_every_field_error(self, event_fields):
        event_fields.update(
            title="ab",
            description="short",
            venue="   ",
            date="not-a-date",
            time="25:00",
            mode="telepathic",
            agenda=[],
            tags=[" "],
        )

        with pytest.raises(ValidationError) as info:
            normalize_event_fields(event_fields, EVENT_ID)

        assert set(info.value.as_dict()) == {
            "title",
            "description",
            "venue",
            "date",
            "time",
            "mode",
            "agenda",
            "tags",
        }

    def test_missing_field_is_reported(self, event_fields):
        del event_fields["organizer"]
        with pytest.raises(ValidationError) as info:
            normalize_event_fields(event_fields, EVENT_ID)
        assert info.value.as_dict() == {"organizer": "Organizer is required"}

    def test_symbols_only_title_falls_back_to_id_slug(self, event_fields):
        event_fields["title"] = "!!! ???"
        normalized = normalize_event_fields(event_fields, EVENT_ID)
        assert normalized.slug == "event-5f0c2a4e9d7b"

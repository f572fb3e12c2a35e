"""Normalization pipeline applied to event and booking input before any write.

Every function here is pure. The stores call ``normalize_event_fields`` and
``normalize_email`` strictly before touching the database, so persisted
records are always in canonical form.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime

from django.utils.dateparse import parse_date, parse_datetime
from django.utils.text import slugify

from events.domain.errors import FieldError, InvalidFormatError, ValidationError
from events.domain.value_objects import EventId, EventMode

TITLE_MIN_LENGTH = 3
DESCRIPTION_MIN_LENGTH = 10

REQUIRED_TEXT_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "organizer",
)

_HUMAN_DATE_FORMATS = (
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
)

_TIME_PATTERN = re.compile(r"([0-1]?[0-9]|2[0-3]):[0-5][0-9]")
_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_SEPARATOR_RUN = re.compile(r"[-_]+")


@dataclass(frozen=True)
class NormalizedEventFields:
    """Event fields in the exact form they are persisted."""

    slug: str
    title: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: EventMode
    audience: str
    organizer: str
    agenda: tuple[str, ...]
    tags: tuple[str, ...]


def generate_slug(title: str) -> str:
    """Convert a title to a lowercase, hyphenated, URL-safe slug.

    Non-ASCII letters are transliterated where possible and dropped otherwise.
    Underscores count as separators so the result stays within ``[a-z0-9-]``.
    """
    slug = slugify(title)
    return _SEPARATOR_RUN.sub("-", slug).strip("-")


def fallback_slug(event_id: EventId) -> str:
    """Slug used when a title contains no sluggable characters."""
    return f"event-{event_id.value.hex[:12]}"


def normalize_date(value: str) -> str:
    """Return ``value`` as ``YYYY-MM-DD``.

    The calendar date is taken as submitted. Datetimes carrying an offset are
    not shifted to UTC first.
    """
    text = value.strip()
    parsed = _parse_calendar_date(text)
    if parsed is None:
        raise InvalidFormatError(f"Invalid date format: {value}")
    return parsed.isoformat()


def _parse_calendar_date(text: str) -> date | None:
    try:
        parsed = parse_date(text)
        if parsed is not None:
            return parsed
        moment = parse_datetime(text)
        if moment is not None:
            return moment.date()
    except ValueError:
        # Well formed but not a real date, e.g. 2025-02-30.
        return None

    for fmt in _HUMAN_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def normalize_time(value: str) -> str:
    """Validate a 24-hour ``H:MM``/``HH:MM`` time; returned unchanged."""
    if not _TIME_PATTERN.fullmatch(value):
        raise InvalidFormatError(f"Invalid time format. Expected HH:MM, got: {value}")
    return value


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_PATTERN.fullmatch(value))


def normalize_email(value: object) -> str:
    """Trim and lowercase an email address.

    Raises:
        ValidationError: If the value is missing or not shaped like an address.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError.for_field("email", "Email is required")
    email = value.strip().lower()
    if not is_valid_email(email):
        raise ValidationError.for_field("email", "Please provide a valid email address")
    return email


def _normalize_items(value: object, *, distinct: bool) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return ()
    items: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            continue
        text = item.strip()
        if distinct and text in items:
            continue
        items.append(text)
    return tuple(items)


def normalize_event_fields(raw: Mapping[str, object], event_id: EventId) -> NormalizedEventFields:
    """Validate and canonicalize raw event input.

    All problems are collected and raised together so callers can report
    every offending field at once.

    Raises:
        ValidationError: If any field is missing, blank, malformed or out of range.
    """
    errors: list[FieldError] = []
    text: dict[str, str] = {}

    for field in REQUIRED_TEXT_FIELDS:
        value = raw.get(field)
        if not isinstance(value, str) or not value.strip():
            errors.append(FieldError(field, f"{field.capitalize()} is required"))
            continue
        text[field] = value.strip()

    if "title" in text and len(text["title"]) < TITLE_MIN_LENGTH:
        errors.append(
            FieldError("title", f"Title must be at least {TITLE_MIN_LENGTH} characters")
        )
    if "description" in text and len(text["description"]) < DESCRIPTION_MIN_LENGTH:
        errors.append(
            FieldError(
                "description",
                f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters",
            )
        )

    mode = None
    if "mode" in text:
        try:
            mode = EventMode(text["mode"].lower())
        except ValueError:
            errors.append(
                FieldError("mode", f"Mode must be one of: {', '.join(EventMode.values())}")
            )

    for field, normalizer in (("date", normalize_date), ("time", normalize_time)):
        if field in text:
            try:
                text[field] = normalizer(text[field])
            except InvalidFormatError as exc:
                errors.append(FieldError(field, str(exc)))

    agenda = _normalize_items(raw.get("agenda"), distinct=False)
    if not agenda:
        errors.append(FieldError("agenda", "Agenda must be a non-empty array"))
    tags = _normalize_items(raw.get("tags"), distinct=True)
    if not tags:
        errors.append(FieldError("tags", "Tags must be a non-empty array"))

    if errors:
        raise ValidationError.for_fields(errors)

    return NormalizedEventFields(
        slug=generate_slug(text["title"]) or fallback_slug(event_id),
        title=text["title"],
        description=text["description"],
        overview=text["overview"],
        image=text["image"],
        venue=text["venue"],
        location=text["location"],
        date=text["date"],
        time=text["time"],
        mode=mode,
        audience=text["audience"],
        organizer=text["organizer"],
        agenda=agenda,
        tags=tags,
    )

"""Pytest configuration and shared fixtures."""

import dataclasses
import uuid
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from events.domain import Booking, BookingId, Event, EventId, EventPage, PageRequest
from events.domain.errors import (
    ErrorCode,
    EventReferenceError,
    ImageUploadError,
    UniquenessError,
)
from events.domain.models import rank_similar_events
from events.domain.normalization import normalize_email, normalize_event_fields
from events.stores.images import ImageStore, ImageUpload
from events.stores.interfaces import BookingStore, EventStore
from events.wiring import reset_services

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)


class InMemoryEventStore(EventStore):
    def __init__(self) -> None:
        self.events: dict[uuid.UUID, Event] = {}

    def create(self, fields: Mapping[str, object]) -> Event:
        event_id = EventId(uuid.uuid4())
        normalized = normalize_event_fields(fields, event_id)
        if any(event.slug == normalized.slug for event in self.events.values()):
            raise UniquenessError(f'An event with slug "{normalized.slug}" already exists')
        stamp = EPOCH + timedelta(seconds=len(self.events))
        event = Event(
            id=event_id,
            created_at=stamp,
            updated_at=stamp,
            **dataclasses.asdict(normalized),
        )
        self.events[event_id.value] = event
        return event

    def find_by_slug(self, slug: str) -> Event | None:
        wanted = slug.strip().lower()
        return next((e for e in self.events.values() if e.slug == wanted), None)

    def find_by_id(self, event_id: EventId) -> Event | None:
        return self.events.get(event_id.value)

    def event_exists(self, event_id: EventId) -> bool:
        return event_id.value in self.events

    def _newest_first(self) -> list[Event]:
        return sorted(self.events.values(), key=lambda e: e.created_at, reverse=True)

    def list_page(self, page_request: PageRequest) -> EventPage:
        start = page_request.offset
        rows = self._newest_first()[start : start + page_request.limit]
        return EventPage(events=tuple(rows), total=len(self.events), request=page_request)

    def find_similar(self, slug: str, limit: int) -> list[Event]:
        reference = self.find_by_slug(slug)
        if reference is None:
            return []
        return rank_similar_events(reference, self._newest_first(), limit)


class InMemoryBookingStore(BookingStore):
    def __init__(self, events: InMemoryEventStore) -> None:
        self._events = events
        self.bookings: list[Booking] = []

    def create(self, event_id: EventId, email: object) -> Booking:
        normalized = normalize_email(email)
        if not self._events.event_exists(event_id):
            raise EventReferenceError(str(event_id))
        if any(b.event_id == event_id and b.email == normalized for b in self.bookings):
            raise UniquenessError("Already booked", code=ErrorCode.BOOKING_EXISTS)
        now = datetime.now(timezone.utc)
        booking = Booking(
            id=BookingId(uuid.uuid4()),
            event_id=event_id,
            email=normalized,
            created_at=now,
            updated_at=now,
        )
        self.bookings.append(booking)
        return booking

    def count_for_event(self, event_id: EventId) -> int:
        return sum(1 for b in self.bookings if b.event_id == event_id)


class RecordingImageStore(ImageStore):
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.uploads: list[ImageUpload] = []

    def upload(self, image: ImageUpload) -> str:
        if self.fail:
            raise ImageUploadError("blob store unreachable")
        self.uploads.append(image)
        return f"https://images.test/{image.filename}"


def build_event_fields(**overrides) -> dict:
    fields = {
        "title": "React Summit 2025",
        "description": "The biggest React conference in the world.",
        "overview": "Two days of talks, workshops and networking.",
        "image": "https://images.test/react-summit.png",
        "venue": "Beurs van Berlage",
        "location": "Amsterdam, Netherlands",
        "date": "2025-06-02",
        "time": "09:00",
        "mode": "offline",
        "audience": "Frontend developers",
        "organizer": "GitNation",
        "agenda": ["Opening keynote", "React internals", "Closing panel"],
        "tags": ["react", "frontend", "javascript"],
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def local_image_storage(settings):
    settings.STORAGES = {
        "default": {"BACKEND": "django.core.files.storage.InMemoryStorage"},
        "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
    }
    settings.IMAGE_STORE_BACKEND = "storage"
    settings.EXPOSE_ERROR_DETAIL = False
    reset_services()
    yield
    reset_services()


@pytest.fixture
def event_fields() -> dict:
    return build_event_fields()


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def booking_store(event_store: InMemoryEventStore) -> InMemoryBookingStore:
    return InMemoryBookingStore(event_store)


@pytest.fixture
def image_store() -> RecordingImageStore:
    return RecordingImageStore()


@pytest.fixture
def image_upload() -> ImageUpload:
    return ImageUpload(filename="poster.png", content=PNG_BYTES, content_type="image/png")


@pytest.fixture
def image_file() -> SimpleUploadedFile:
    return SimpleUploadedFile("poster.png", PNG_BYTES, content_type="image/png")


@pytest.fixture
def make_event():
    """Persist events through the Django store."""
    from events.stores.django_store import DjangoEventStore

    store = DjangoEventStore()

    def _make(**overrides) -> Event:
        return store.create(build_event_fields(**overrides))

    return _make

"""Django ORM implementation of the event and booking stores."""

import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from django.core.exceptions import ImproperlyConfigured
from django.db import IntegrityError, InterfaceError, OperationalError, transaction

from events import models
from events.domain import Booking, BookingId, Event, EventId, EventMode, EventPage, PageRequest
from events.domain.errors import (
    ConnectivityError,
    ErrorCode,
    EventReferenceError,
    UniquenessError,
)
from events.domain.models import rank_similar_events
from events.domain.normalization import normalize_email, normalize_event_fields
from events.stores.interfaces import BookingStore, EventStore

# Upper bound on rows scanned when ranking similar events.
SIMILAR_CANDIDATE_WINDOW = 200


@contextmanager
def _connection_errors() -> Iterator[None]:
    """Translate connection-level database failures into ConnectivityError."""
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        raise ConnectivityError() from exc
    except ImproperlyConfigured as exc:
        raise ConnectivityError("Database is not configured") from exc


def _slug_taken(slug: str) -> UniquenessError:
    return UniquenessError(f'An event with slug "{slug}" already exists')


def event_to_domain(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        slug=row.slug,
        title=row.title,
        description=row.description,
        overview=row.overview,
        image=row.image,
        venue=row.venue,
        location=row.location,
        date=row.date,
        time=row.time,
        mode=EventMode(row.mode),
        audience=row.audience,
        organizer=row.organizer,
        agenda=tuple(row.agenda),
        tags=tuple(row.tags),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def booking_to_domain(row: models.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        event_id=EventId(row.event_id),
        email=row.email,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class DjangoEventStore(EventStore):
    """Relational event store using the Django ORM."""

    def create(self, fields: Mapping[str, object]) -> Event:
        event_id = EventId(uuid.uuid4())
        normalized = normalize_event_fields(fields, event_id)

        with _connection_errors():
            if models.Event.objects.filter(slug=normalized.slug).exists():
                raise _slug_taken(normalized.slug)
            try:
                with transaction.atomic():
                    row = models.Event.objects.create(
                        id=event_id.value,
                        slug=normalized.slug,
                        title=normalized.title,
                        description=normalized.description,
                        overview=normalized.overview,
                        image=normalized.image,
                        venue=normalized.venue,
                        location=normalized.location,
                        date=normalized.date,
                        time=normalized.time,
                        mode=normalized.mode.value,
                        audience=normalized.audience,
                        organizer=normalized.organizer,
                        agenda=list(normalized.agenda),
                        tags=list(normalized.tags),
                    )
            except IntegrityError as exc:
                # Lost a race with a concurrent insert of the same slug.
                raise _slug_taken(normalized.slug) from exc
        return event_to_domain(row)

    def find_by_slug(self, slug: str) -> Event | None:
        with _connection_errors():
            row = models.Event.objects.filter(slug=slug.strip().lower()).first()
        return event_to_domain(row) if row else None

    def find_by_id(self, event_id: EventId) -> Event | None:
        with _connection_errors():
            row = models.Event.objects.filter(pk=event_id.value).first()
        return event_to_domain(row) if row else None

    def event_exists(self, event_id: EventId) -> bool:
        with _connection_errors():
            return models.Event.objects.filter(pk=event_id.value).exists()

    def list_page(self, page_request: PageRequest) -> EventPage:
        offset = page_request.offset
        with _connection_errors():
            total = models.Event.objects.count()
            rows = list(
                models.Event.objects.order_by("-created_at", "-id")[
                    offset : offset + page_request.limit
                ]
            )
        return EventPage(
            events=tuple(event_to_domain(row) for row in rows),
            total=total,
            request=page_request,
        )

    def find_similar(self, slug: str, limit: int) -> list[Event]:
        reference = self.find_by_slug(slug)
        if reference is None:
            return []
        with _connection_errors():
            rows = list(
                models.Event.objects.exclude(pk=reference.id.value).order_by("-created_at")[
                    :SIMILAR_CANDIDATE_WINDOW
                ]
            )
        return rank_similar_events(reference, (event_to_domain(row) for row in rows), limit)


class DjangoBookingStore(BookingStore):
    """Relational booking store using the Django ORM."""

    def create(self, event_id: EventId, email: object) -> Booking:
        normalized_email = normalize_email(email)

        with _connection_errors():
            # Advisory check; the foreign key still guards against a concurrent delete.
            if not models.Event.objects.filter(pk=event_id.value).exists():
                raise EventReferenceError(str(event_id))
            try:
                with transaction.atomic():
                    row = models.Booking.objects.create(
                        event_id=event_id.value,
                        email=normalized_email,
                    )
            except IntegrityError as exc:
                if not models.Event.objects.filter(pk=event_id.value).exists():
                    raise EventReferenceError(str(event_id)) from exc
                raise UniquenessError(
                    "This email has already booked a spot for the event",
                    code=ErrorCode.BOOKING_EXISTS,
                ) from exc
        return booking_to_domain(row)

    def count_for_event(self, event_id: EventId) -> int:
        with _connection_errors():
            return models.Booking.objects.filter(event_id=event_id.value).count()

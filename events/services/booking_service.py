"""Booking service."""

import logging

from events.domain.errors import ValidationError
from events.domain.models import Booking, Event
from events.domain.value_objects import EventId
from events.stores.interfaces import BookingStore

logger = logging.getLogger(__name__)


class BookingService:
    """Service for booking a spot at an event."""

    def __init__(self, store: BookingStore) -> None:
        self._store = store

    def book(self, event_id: object, email: object) -> Booking:
        """Book a spot for ``email`` at the event ``event_id``.

        Raises:
            ValidationError: If the event ID or email is malformed.
            EventReferenceError: If the event does not exist.
            UniquenessError: If the email already booked this event.
        """
        if not isinstance(event_id, str) or not event_id.strip():
            raise ValidationError.for_field("eventId", "Event ID is required")
        try:
            parsed = EventId.from_string(event_id.strip())
        except ValueError as exc:
            raise ValidationError.for_field("eventId", "Invalid event ID format") from exc

        booking = self._store.create(parsed, email)
        logger.info(f"Booking created: id={booking.id} event={booking.event_id}")
        return booking

    def count_for(self, event: Event) -> int:
        return self._store.count_for_event(event.id)

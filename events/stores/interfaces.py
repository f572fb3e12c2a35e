"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Every write runs the
normalization pipeline before persisting.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from events.domain import Booking, Event, EventId, EventPage, PageRequest


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def create(self, fields: Mapping[str, object]) -> Event:
        """Normalize and persist a new event.

        Raises:
            ValidationError: If the fields do not normalize.
            UniquenessError: If the generated slug is already taken.
        """
        ...

    @abstractmethod
    def find_by_slug(self, slug: str) -> Event | None:
        """Return the event with this slug (case-insensitive), or None."""
        ...

    @abstractmethod
    def find_by_id(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def list_page(self, page_request: PageRequest) -> EventPage:
        """Return one page of events ordered by created_at descending."""
        ...

    @abstractmethod
    def find_similar(self, slug: str, limit: int) -> list[Event]:
        """Return up to ``limit`` other events sharing a tag with ``slug``."""
        ...


class BookingStore(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    def create(self, event_id: EventId, email: object) -> Booking:
        """Validate and persist a booking for an existing event.

        Raises:
            ValidationError: If the email is malformed.
            EventReferenceError: If the event does not exist.
            UniquenessError: If this email already booked the event.
        """
        ...

    @abstractmethod
    def count_for_event(self, event_id: EventId) -> int:
        """Return the number of bookings for an event."""
        ...

from events.domain.models import Booking, Event, EventPage
from events.domain.value_objects import BookingId, EventId, EventMode, PageRequest

__all__ = [
    "Event",
    "Booking",
    "EventPage",
    "EventId",
    "BookingId",
    "EventMode",
    "PageRequest",
]

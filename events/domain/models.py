"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from events.domain.value_objects import BookingId, EventId, EventMode, PageRequest


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
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
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Booking:
    """Domain representation of a Booking."""

    id: BookingId
    event_id: EventId
    email: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class EventPage:
    """One page of events plus the total number of stored events."""

    events: tuple[Event, ...]
    total: int
    request: PageRequest

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.request.limit)

    @property
    def has_next_page(self) -> bool:
        return self.request.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.request.page > 1


def rank_similar_events(reference: Event, candidates: Iterable[Event], limit: int) -> list[Event]:
    """Order candidates by tags shared with ``reference``, most first.

    Candidates sharing no tag are left out. ``candidates`` are expected newest
    first, which stays the order among equally similar events.
    """
    wanted = {tag.lower() for tag in reference.tags}
    scored = []
    for candidate in candidates:
        if candidate.id == reference.id:
            continue
        shared = len(wanted.intersection(tag.lower() for tag in candidate.tags))
        if shared:
            scored.append((shared, candidate))
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [candidate for _, candidate in scored[:limit]]

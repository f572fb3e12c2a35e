"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Mapping

from events.domain.errors import EventNotFoundError, ValidationError
from events.domain.models import Event, EventPage
from events.domain.value_objects import PageRequest
from events.stores.images import ImageStore, ImageUpload
from events.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore, images: ImageStore) -> None:
        self._store = store
        self._images = images

    def create_event(self, fields: Mapping[str, object], image: ImageUpload | None) -> Event:
        """Upload the event image, then persist the event with its URL.

        Raises:
            ValidationError: If the image is missing or the fields are invalid.
            ImageUploadError: If the image store fails.
            UniquenessError: If the title slugifies to an existing slug.
        """
        if image is None or not image.content:
            raise ValidationError.for_field("image", "Image file is required")

        image_url = self._images.upload(image)
        logger.info(f"Creating event with data: title={fields.get('title')!r}")
        event = self._store.create({**fields, "image": image_url})
        logger.info(f"Event created successfully: id={event.id} slug={event.slug}")
        return event

    def get_event(self, slug: str) -> Event:
        """Return an event by slug.

        Raises:
            ValidationError: If the slug is blank.
            EventNotFoundError: If the event does not exist.
        """
        if not slug or not slug.strip():
            raise ValidationError.for_field("slug", "Slug cannot be empty")
        event = self._store.find_by_slug(slug)
        if event is None:
            raise EventNotFoundError(slug)
        return event

    def list_events(self, page_request: PageRequest) -> EventPage:
        """Return one page of events, newest first."""
        return self._store.list_page(page_request)

    def similar_events(self, slug: str, limit: int) -> list[Event]:
        """Return events sharing tags with the event behind ``slug``.

        Raises:
            ValidationError: If the slug is blank.
            EventNotFoundError: If the event does not exist.
        """
        event = self.get_event(slug)
        return self._store.find_similar(event.slug, limit)

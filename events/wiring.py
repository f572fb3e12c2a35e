"""Service wiring for the HTTP handlers.

Handlers receive their services from ``get_services``. The container is built
lazily on first use and cached for the life of the process. Two requests
racing to build it both succeed; the loser's container is discarded, which is
harmless because the stores hold no connections of their own (Django owns
them per thread).
"""

import threading
from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from events.services.booking_service import BookingService
from events.services.event_service import EventService
from events.stores.django_store import DjangoBookingStore, DjangoEventStore
from events.stores.images import AzureBlobImageStore, ImageStore, StorageImageStore

_SERVICES_LOCK = threading.Lock()
_SERVICES: "EventServices | None" = None


@dataclass(frozen=True)
class EventServices:
    events: EventService
    bookings: BookingService


def build_image_store() -> ImageStore:
    backend = settings.IMAGE_STORE_BACKEND
    if backend == "azure":
        return AzureBlobImageStore(
            connection_string=settings.AZURE_STORAGE_CONNECTION_STRING,
            container=settings.AZURE_EVENT_IMAGES_CONTAINER,
        )
    if backend == "storage":
        return StorageImageStore()
    raise ImproperlyConfigured(f"Unknown IMAGE_STORE_BACKEND: {backend!r}")


def build_services() -> EventServices:
    return EventServices(
        events=EventService(store=DjangoEventStore(), images=build_image_store()),
        bookings=BookingService(store=DjangoBookingStore()),
    )


def get_services() -> EventServices:
    global _SERVICES
    if _SERVICES is not None:
        return _SERVICES
    candidate = build_services()
    with _SERVICES_LOCK:
        if _SERVICES is None:
            _SERVICES = candidate
        return _SERVICES


def reset_services() -> None:
    """Drop the cached container so the next request rebuilds it."""
    global _SERVICES
    with _SERVICES_LOCK:
        _SERVICES = None

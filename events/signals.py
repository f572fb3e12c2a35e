"""Django signals for cache invalidation and service rewiring."""

from django.core.signals import setting_changed
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from events import cache
from events.models import Booking, Event
from events.wiring import reset_services

SERVICE_SETTINGS = {
    "IMAGE_STORE_BACKEND",
    "AZURE_STORAGE_CONNECTION_STRING",
    "AZURE_EVENT_IMAGES_CONTAINER",
    "STORAGES",
}


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    cache.invalidate_detail(instance.slug)
    cache.invalidate_lists()


@receiver([post_save, post_delete], sender=Booking)
def invalidate_booking_cache(sender, instance, **kwargs):
    """Invalidate the booked event's detail cache (it carries the bookings count)."""
    slug = Event.objects.filter(pk=instance.event_id).values_list("slug", flat=True).first()
    if slug:
        cache.invalidate_detail(slug)


@receiver(setting_changed)
def rewire_services(sender, setting, **kwargs):
    """Rebuild services when a setting they depend on changes."""
    if setting in SERVICE_SETTINGS:
        reset_services()

"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py,
normalization in domain/normalization.py.
"""

import uuid

from django.db import models

from events.domain.value_objects import EventMode


class Event(models.Model):
    """Persistence model for events."""

    MODE_CHOICES = [(mode.value, mode.value.capitalize()) for mode in EventMode]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slug = models.SlugField(max_length=255, unique=True)
    title = models.CharField(max_length=255)
    description = models.TextField()
    overview = models.TextField()
    image = models.URLField(max_length=500)
    venue = models.CharField(max_length=255)
    location = models.CharField(max_length=255)
    date = models.CharField(max_length=10)
    time = models.CharField(max_length=5)
    mode = models.CharField(max_length=10, choices=MODE_CHOICES)
    audience = models.CharField(max_length=255)
    organizer = models.TextField()
    agenda = models.JSONField(default=list)
    tags = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="event_created_at_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Booking(models.Model):
    """Persistence model for bookings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="bookings")
    email = models.EmailField(max_length=254)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["event", "email"], name="unique_booking_per_email"),
        ]

    def __str__(self) -> str:
        return f"{self.email} - {self.event.title}"

"""Serializers for request parsing and for transforming domain models to API responses."""

import json

from rest_framework import serializers
from rest_framework.fields import empty
from rest_framework.utils import html

from events.domain.errors import InvalidFormatError
from events.domain.normalization import (
    DESCRIPTION_MIN_LENGTH,
    TITLE_MIN_LENGTH,
    normalize_date,
    normalize_time,
)
from events.domain.value_objects import EventMode


class StringListField(serializers.Field):
    """A non-empty list of strings.

    Accepts repeated form keys, a JSON array, or a single string split on
    ``separator``.
    """

    default_error_messages = {
        "invalid": "Expected a list of strings.",
        "empty": "This list may not be empty.",
    }

    def __init__(self, separator: str = ",", **kwargs) -> None:
        self.separator = separator
        super().__init__(**kwargs)

    def get_value(self, dictionary):
        if html.is_html_input(dictionary):
            values = dictionary.getlist(self.field_name)
            if not values:
                return empty
            return values if len(values) > 1 else values[0]
        return dictionary.get(self.field_name, empty)

    def to_internal_value(self, data):
        if isinstance(data, str):
            text = data.strip()
            if text.startswith("["):
                try:
                    data = json.loads(text)
                except json.JSONDecodeError:
                    self.fail("invalid")
            else:
                data = text.split(self.separator)
        if not isinstance(data, (list, tuple)) or not all(isinstance(item, str) for item in data):
            self.fail("invalid")
        items = [item.strip() for item in data if item.strip()]
        if not items:
            self.fail("empty")
        return items

    def to_representation(self, value):
        return list(value)


class EventCreateSerializer(serializers.Serializer):
    """Boundary validation for POST /api/events, run before the image upload."""

    title = serializers.CharField(min_length=TITLE_MIN_LENGTH, max_length=255)
    description = serializers.CharField(min_length=DESCRIPTION_MIN_LENGTH)
    overview = serializers.CharField()
    venue = serializers.CharField(max_length=255)
    location = serializers.CharField(max_length=255)
    date = serializers.CharField(max_length=64)
    time = serializers.CharField()
    mode = serializers.CharField()
    audience = serializers.CharField(max_length=255)
    organizer = serializers.CharField()
    # Agenda items may contain commas, so a single string splits on lines.
    agenda = StringListField(separator="\n")
    tags = StringListField(separator=",")

    def validate_mode(self, value: str) -> str:
        mode = value.strip().lower()
        if mode not in EventMode.values():
            raise serializers.ValidationError(f"Mode must be one of: {', '.join(EventMode.values())}")
        return mode

    def validate_date(self, value: str) -> str:
        try:
            return normalize_date(value)
        except InvalidFormatError as exc:
            raise serializers.ValidationError(str(exc)) from exc

    def validate_time(self, value: str) -> str:
        try:
            return normalize_time(value)
        except InvalidFormatError as exc:
            raise serializers.ValidationError(str(exc)) from exc


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.CharField()
    slug = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    overview = serializers.CharField()
    image = serializers.CharField()
    venue = serializers.CharField()
    location = serializers.CharField()
    date = serializers.CharField()
    time = serializers.CharField()
    mode = serializers.CharField(source="mode.value")
    audience = serializers.CharField()
    organizer = serializers.CharField()
    agenda = serializers.ListField(child=serializers.CharField())
    tags = serializers.ListField(child=serializers.CharField())
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.CharField()
    eventId = serializers.CharField(source="event_id")
    email = serializers.CharField()
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class PaginationSerializer(serializers.Serializer):
    """Serializer for the pagination block of an EventPage."""

    page = serializers.IntegerField(source="request.page")
    limit = serializers.IntegerField(source="request.limit")
    total = serializers.IntegerField()
    totalPages = serializers.IntegerField(source="total_pages")
    hasNextPage = serializers.BooleanField(source="has_next_page")
    hasPrevPage = serializers.BooleanField(source="has_prev_page")

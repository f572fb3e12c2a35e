"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details outside development
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events import cache
from events.domain.errors import (
    ConnectivityError,
    EventNotFoundError,
    EventReferenceError,
    FieldError,
    UniquenessError,
    ValidationError,
)
from events.domain.value_objects import PageRequest, similar_limit_from_query
from events.handlers.serializers import (
    BookingSerializer,
    EventCreateSerializer,
    EventSerializer,
    PaginationSerializer,
)
from events.stores.images import ImageUpload
from events.wiring import EventServices, get_services

logger = logging.getLogger(__name__)


def _message(message: str, status_code: int, **extra) -> Response:
    return Response({"message": message, **extra}, status=status_code)


def _server_error(message: str, exc: Exception) -> Response:
    body = {"message": message}
    if settings.EXPOSE_ERROR_DETAIL:
        body["error"] = str(exc)
    return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _serializer_error(errors: dict) -> ValidationError:
    return ValidationError.for_fields(
        [FieldError(field, " ".join(str(m) for m in messages)) for field, messages in errors.items()]
    )


def _read_image(request: Request) -> ImageUpload | None:
    upload = request.FILES.get("image")
    if upload is None:
        return None
    content = upload.read()
    if not content:
        return None
    return ImageUpload(
        filename=upload.name or "image",
        content=content,
        content_type=upload.content_type,
    )


class EventsAPIView(APIView):
    """Base view resolving the service container for each request."""

    def get_services(self) -> EventServices:
        return get_services()


class EventListView(EventsAPIView):
    """Handler for GET and POST /api/events"""

    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def get(self, request: Request) -> Response:
        page_request = PageRequest.from_query(
            request.query_params.get("page"),
            request.query_params.get("limit"),
        )
        key = cache.list_key(page_request)
        cached = cache.get(key)
        if cached is not None:
            return Response(cached)

        try:
            page = self.get_services().events.list_events(page_request)
        except Exception:
            logger.exception("[GET /api/events] Event fetching failed")
            return _message("Event fetching failed", status.HTTP_500_INTERNAL_SERVER_ERROR)

        payload = {
            "message": "Events fetched successfully",
            "data": {
                "events": EventSerializer(page.events, many=True).data,
                "pagination": PaginationSerializer(page).data,
            },
        }
        cache.put(key, payload)
        return Response(payload)

    def post(self, request: Request) -> Response:
        image = _read_image(request)
        if image is None:
            return _message("Image file is required", status.HTTP_400_BAD_REQUEST)

        # Rejected before the upload so no orphan image is stored.
        serializer = EventCreateSerializer(data=request.data)
        if not serializer.is_valid():
            error = _serializer_error(serializer.errors)
            logger.error(f"[POST /api/events] Event creation failed: {error}")
            return _server_error("Event creation failed", error)

        try:
            event = self.get_services().events.create_event(serializer.validated_data, image)
        except Exception as exc:
            title = serializer.validated_data.get("title", "unknown")
            logger.exception(f"[POST /api/events] Event creation failed: title={title!r}")
            return _server_error("Event creation failed", exc)

        return _message(
            "Event created successfully",
            status.HTTP_201_CREATED,
            event=EventSerializer(event).data,
        )


class EventDetailView(EventsAPIView):
    """Handler for GET /api/events/{slug}"""

    def get(self, request: Request, slug: str = "") -> Response:
        if not slug or not slug.strip():
            return _message("Slug cannot be empty", status.HTTP_400_BAD_REQUEST)

        key = cache.detail_key(slug)
        cached = cache.get(key)
        if cached is not None:
            return Response(cached)

        try:
            services = self.get_services()
            event = services.events.get_event(slug)
            bookings = services.bookings.count_for(event)
        except EventNotFoundError as exc:
            return _message(exc.message, status.HTTP_404_NOT_FOUND)
        except ConnectivityError:
            logger.exception(f"[GET /api/events/{slug}] Database unavailable")
            return _message("Database connection failed", status.HTTP_500_INTERNAL_SERVER_ERROR)
        except Exception as exc:
            logger.exception(f"[GET /api/events/{slug}] Failed to fetch event")
            return _server_error("Failed to fetch event", exc)

        payload = {
            "message": "Event fetched successfully",
            "event": {**EventSerializer(event).data, "bookings": bookings},
        }
        cache.put(key, payload)
        return Response(payload)


class SimilarEventListView(EventsAPIView):
    """Handler for GET /api/events/{slug}/similar"""

    def get(self, request: Request, slug: str) -> Response:
        limit = similar_limit_from_query(request.query_params.get("limit"))
        try:
            events = self.get_services().events.similar_events(slug, limit)
        except ValidationError as exc:
            return _message(exc.message, status.HTTP_400_BAD_REQUEST)
        except EventNotFoundError as exc:
            return _message(exc.message, status.HTTP_404_NOT_FOUND)
        except Exception as exc:
            logger.exception(f"[GET /api/events/{slug}/similar] Failed to fetch similar events")
            return _server_error("Failed to fetch similar events", exc)

        return _message(
            "Similar events fetched successfully",
            status.HTTP_200_OK,
            events=EventSerializer(events, many=True).data,
        )


class BookingCreateView(EventsAPIView):
    """Handler for POST /api/bookings"""

    parser_classes = [JSONParser, FormParser, MultiPartParser]

    def post(self, request: Request) -> Response:
        try:
            booking = self.get_services().bookings.book(
                request.data.get("eventId"),
                request.data.get("email"),
            )
        except ValidationError as exc:
            return _message(
                "Invalid booking data",
                status.HTTP_400_BAD_REQUEST,
                errors=exc.as_dict(),
            )
        except EventReferenceError:
            return _message("Event does not exist", status.HTTP_404_NOT_FOUND)
        except UniquenessError as exc:
            return _message(exc.message, status.HTTP_409_CONFLICT)
        except Exception as exc:
            logger.exception("[POST /api/bookings] Booking failed")
            return _server_error("Booking failed", exc)

        return _message(
            "Booking created successfully",
            status.HTTP_201_CREATED,
            booking=BookingSerializer(booking).data,
        )

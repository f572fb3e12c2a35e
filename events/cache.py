"""Cache keys for event API responses.

List responses are keyed by a version token so a single write can invalidate
every cached page at once.
"""

import uuid

from django.conf import settings
from django.core.cache import cache

from events.domain.value_objects import PageRequest

LIST_VERSION_KEY = "events:list:version"


def detail_key(slug: str) -> str:
    return f"events:slug:{slug.strip().lower()}"


def list_key(page_request: PageRequest) -> str:
    version = cache.get_or_set(LIST_VERSION_KEY, uuid.uuid4().hex, timeout=None)
    return f"events:list:{version}:{page_request.page}:{page_request.limit}"


def get(key: str) -> dict | None:
    return cache.get(key)


def put(key: str, payload: dict) -> None:
    cache.set(key, payload, timeout=settings.EVENTS_CACHE_TIMEOUT)


def invalidate_lists() -> None:
    cache.set(LIST_VERSION_KEY, uuid.uuid4().hex, timeout=None)


def invalidate_detail(slug: str) -> None:
    cache.delete(detail_key(slug))

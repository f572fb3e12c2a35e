"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID

MIN_PAGE = 1
MAX_PAGE = 1000
DEFAULT_PAGE = 1
MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_LIMIT = 10
DEFAULT_SIMILAR_LIMIT = 3
MAX_SIMILAR_LIMIT = 20


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


class EventMode(Enum):
    """How an event is attended."""

    ONLINE = "online"
    OFFLINE = "offline"
    HYBRID = "hybrid"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(mode.value for mode in cls)


def _clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(value, upper))


def _parse_int(raw: object, default: int) -> int:
    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


def similar_limit_from_query(raw: object) -> int:
    return _clamp(_parse_int(raw, DEFAULT_SIMILAR_LIMIT), 1, MAX_SIMILAR_LIMIT)


@dataclass(frozen=True)
class PageRequest:
    """A clamped page/limit pair for listing events."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if not MIN_PAGE <= self.page <= MAX_PAGE:
            raise ValueError(f"Page must be between {MIN_PAGE} and {MAX_PAGE}")
        if not MIN_LIMIT <= self.limit <= MAX_LIMIT:
            raise ValueError(f"Limit must be between {MIN_LIMIT} and {MAX_LIMIT}")

    @classmethod
    def from_query(cls, page: object = None, limit: object = None) -> Self:
        """Build from raw query values, falling back to defaults and clamping."""
        return cls(
            page=_clamp(_parse_int(page, DEFAULT_PAGE), MIN_PAGE, MAX_PAGE),
            limit=_clamp(_parse_int(limit, DEFAULT_LIMIT), MIN_LIMIT, MAX_LIMIT),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class EntityId:
    """Unique identifier for a persisted resource."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


class ComposerId(EntityId):
    """Unique identifier for a Composer."""


class PieceId(EntityId):
    """Unique identifier for a Piece."""


class ProgrammeId(EntityId):
    """Unique identifier for a Programme."""


class VenueId(EntityId):
    """Unique identifier for a Venue."""


class EventId(EntityId):
    """Unique identifier for an Event."""


class EventStatus(str, Enum):
    """Lifecycle state of an Event.

    Drafts are the only mutable events. The restriction does not apply to
    notes, and it extends to programmes: a programme referenced by at least
    one published event is frozen too.
    """

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Timeframe(str, Enum):
    """When an event's date falls relative to now. Used as a list filter."""

    PAST = "past"
    UPCOMING = "upcoming"


class BiographyVariant(str, Enum):
    """Allowed biography variants.

    The short variant is not guaranteed to be a subset of the full one.
    """

    FULL = "full"
    SHORT = "short"

"""Domain models representing persisted state.

These are pure domain objects with no API input rules and no knowledge of
each other's storage. Each type carries its own validation rules, which only
look at the object itself: whether referenced resources exist is a
persistence concern. Django ORM models are in cms/models.py.
"""

from dataclasses import dataclass
from datetime import datetime

from cms.domain.errors import EventImmutableError, FieldError, InvalidResourceError
from cms.domain.value_objects import (
    BiographyVariant,
    ComposerId,
    EventId,
    EventStatus,
    PieceId,
    ProgrammeId,
    VenueId,
)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True)
class Composer:
    """Domain representation of a Composer."""

    full_name: str
    short_name: str
    id: ComposerId | None = None

    def validate(self) -> None:
        if _blank(self.full_name):
            raise FieldError("full_name", "composer full name is empty")
        if _blank(self.short_name):
            raise FieldError("short_name", "composer short name is empty")


@dataclass(frozen=True)
class Piece:
    """Domain representation of a Piece."""

    title: str
    composer_id: ComposerId | None = None
    id: PieceId | None = None

    def validate(self) -> None:
        if _blank(self.title):
            raise FieldError("title", "piece title is empty")


@dataclass(frozen=True)
class Programme:
    """Domain representation of a Programme's metadata."""

    title: str
    id: ProgrammeId | None = None

    def validate(self) -> None:
        if _blank(self.title):
            raise FieldError("title", "programme title is empty")


@dataclass(frozen=True)
class ProgrammePiece:
    """A piece at a 1-based position within a programme."""

    piece: Piece
    composer: Composer
    sequence: int


@dataclass(frozen=True)
class ProgrammeWithPieces:
    """A programme with its pieces in presentation order."""

    programme: Programme
    pieces: tuple[ProgrammePiece, ...] = ()


@dataclass(frozen=True)
class Venue:
    """Domain representation of a Venue."""

    name: str
    full_address: str
    short_address: str
    id: VenueId | None = None

    def validate(self) -> None:
        if _blank(self.name):
            raise FieldError("name", "venue name is empty")
        if _blank(self.full_address):
            raise FieldError("full_address", "venue full address is empty")
        if _blank(self.short_address):
            raise FieldError("short_address", "venue short address is empty")


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event.

    Editability, publishability and deletability are separate rules:
    ``ensure_mutable`` gates metadata edits, ``ensure_publishable`` gates the
    transition to published, and the service refuses to delete published
    events.
    """

    title: str
    date: datetime | None = None
    ticket_link: str | None = None
    venue_id: VenueId | None = None
    programme_id: ProgrammeId | None = None
    status: EventStatus = EventStatus.DRAFT
    notes: str | None = None
    id: EventId | None = None

    def validate(self) -> None:
        if _blank(self.title):
            raise FieldError("title", "event title is empty")
        if not _is_status(self.status):
            raise FieldError("status", "invalid event status")

    def ensure_mutable(self) -> None:
        """Raise unless the event is a draft."""
        if self.status == EventStatus.DRAFT:
            return
        if _is_status(self.status):
            raise EventImmutableError()
        raise InvalidResourceError(FieldError("status", "invalid event status"))

    def ensure_publishable(self) -> None:
        """Raise for the first missing field in date, ticket link, venue, programme."""
        if self.date is None:
            raise FieldError("date", "event date is empty")
        if _blank(self.ticket_link):
            raise FieldError("ticket_link", "event ticket link is empty")
        if self.venue_id is None:
            raise FieldError("venue_id", "event venue is empty")
        if self.programme_id is None:
            raise FieldError("programme_id", "event programme is empty")


def _is_status(value: object) -> bool:
    try:
        EventStatus(value)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class EventWithTimestamps:
    """An event with its bookkeeping timestamps."""

    event: Event
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class EventWithProgramme:
    """An event with its programme embedded, when it has one."""

    event: Event
    programme: ProgrammeWithPieces | None = None


@dataclass(frozen=True)
class Biography:
    """Domain representation of a Biography, keyed by variant."""

    content: str
    variant: BiographyVariant

    def validate(self) -> None:
        validate_variant(self.variant)


def validate_variant(value: object) -> BiographyVariant:
    try:
        return BiographyVariant(value)
    except ValueError:
        raise FieldError("variant", "invalid biography variant") from None


@dataclass(frozen=True)
class ComposerWithDetails:
    """A composer with the number of pieces attributed to it."""

    composer: Composer
    piece_count: int = 0


@dataclass(frozen=True)
class PieceWithDetails:
    """A piece with the number of programmes that include it."""

    piece: Piece
    programme_count: int = 0


@dataclass(frozen=True)
class ProgrammeWithDetails:
    """A programme with its piece count and published event count."""

    programme: Programme
    piece_count: int = 0
    event_count: int = 0


@dataclass(frozen=True)
class VenueWithDetails:
    """A venue with the number of published events held there."""

    venue: Venue
    event_count: int = 0


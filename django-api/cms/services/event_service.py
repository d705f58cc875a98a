"""Event service - the event lifecycle lives here.

Events move between draft, published and archived only through explicit
transitions (draft, publish, archive); field writes never change status.

Three independent rules apply:
- Mutability: metadata edits are allowed only on drafts. Notes are exempt
  and go through update_notes.
- Publishability: publish requires a valid event, a programme with at least
  one piece, and a date, ticket link, venue and programme.
- Protection: published events cannot be deleted. Drafts and archived
  events can.
"""

import logging
from dataclasses import replace

from cms.domain import (
    Event,
    EventId,
    EventStatus,
    EventWithProgramme,
    EventWithTimestamps,
    ProgrammeWithPieces,
    Timeframe,
)
from cms.domain.errors import (
    DomainError,
    EventNotPublishableError,
    EventProtectedError,
    FieldError,
    InvalidFilterError,
    ProgrammeHasNoPiecesError,
)
from cms.services.common import parse_id, validate
from cms.stores.interfaces import EventStore, ProgrammeStore, UnitOfWork, VenueStore

logger = logging.getLogger("cms.services.event")


def _parse_filter(enum_type, name: str, value):
    if value is None or isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        raise InvalidFilterError(name, str(value)) from None


class EventService:
    """Service for event operations."""

    def __init__(
        self,
        events: EventStore,
        programmes: ProgrammeStore,
        venues: VenueStore,
        uow: UnitOfWork,
    ) -> None:
        self._events = events
        self._programmes = programmes
        self._venues = venues
        self._uow = uow

    def get(self, event_id: str) -> EventWithProgramme:
        """Return an event with its programme and the programme's pieces.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            ResourceNotFoundError: If the event does not exist.
        """
        eid = parse_id(EventId, event_id)
        logger.info("get event", extra={"operation": "event.get", "event_id": str(eid)})
        with self._uow.atomic():
            event = self._events.get(eid)
            return EventWithProgramme(event=event, programme=self._programme_of(event))

    def list_events(
        self,
        status: EventStatus | str | None = None,
        timeframe: Timeframe | str | None = None,
    ) -> list[Event]:
        """Return events, most recent date first, optionally filtered.

        Raises:
            InvalidFilterError: If status or timeframe is not a known value.
        """
        status = _parse_filter(EventStatus, "status", status)
        timeframe = _parse_filter(Timeframe, "timeframe", timeframe)
        logger.info(
            "list events",
            extra={"operation": "event.list", "status": status, "timeframe": timeframe},
        )
        return self._events.list_events(status, timeframe)

    def list_with_timestamps(
        self,
        status: EventStatus | str | None = None,
        timeframe: Timeframe | str | None = None,
    ) -> list[EventWithTimestamps]:
        status = _parse_filter(EventStatus, "status", status)
        timeframe = _parse_filter(Timeframe, "timeframe", timeframe)
        logger.info(
            "list events with timestamps",
            extra={
                "operation": "event.list_with_timestamps",
                "status": status,
                "timeframe": timeframe,
            },
        )
        return self._events.list_with_timestamps(status, timeframe)

    def create(self, event: Event) -> Event:
        """Create an event. New events always start as drafts."""
        logger.info("create event", extra={"operation": "event.create"})
        event = replace(event, id=None, status=EventStatus.DRAFT)
        validate(event, "event")
        return self._events.create(event)

    def update(self, event_id: str, event: Event) -> EventWithProgramme:
        """Update a draft event's metadata and return it with its programme.

        Status and notes are kept from the stored event: status changes only
        through transitions, notes only through :meth:`update_notes`.

        Raises:
            EventImmutableError: If the stored event is not a draft.
            InvalidResourceError: If the new metadata is invalid.
            ResourceNotFoundError: If the event, its venue or its programme
                does not exist.
        """
        eid = parse_id(EventId, event_id)
        logger.info("update event", extra={"operation": "event.update", "event_id": str(eid)})
        with self._uow.atomic():
            current = self._events.get(eid, lock=True)
            try:
                current.ensure_mutable()
            except DomainError as err:
                logger.warning(
                    "update event blocked",
                    extra={"reason": err.code.value, "status": current.status.value},
                )
                raise
            event = replace(event, id=eid, status=current.status, notes=current.notes)
            validate(event, "event")
            event = self._events.update(event)
            return EventWithProgramme(event=event, programme=self._programme_of(event))

    def update_notes(self, event_id: str, notes: str | None) -> Event:
        """Replace an event's notes, whatever its status."""
        eid = parse_id(EventId, event_id)
        logger.info(
            "update event notes",
            extra={"operation": "event.update_notes", "event_id": str(eid)},
        )
        with self._uow.atomic():
            current = self._events.get(eid, lock=True)
            return self._events.update(replace(current, notes=notes))

    def draft(self, event_id: str) -> None:
        """Move an event back to draft, unconditionally."""
        eid = parse_id(EventId, event_id)
        logger.info("draft event", extra={"operation": "event.draft", "event_id": str(eid)})
        self._events.set_status(eid, EventStatus.DRAFT)

    def publish(self, event_id: str) -> None:
        """Publish an event.

        Raises:
            InvalidResourceError: If the stored event fails validation.
            ProgrammeHasNoPiecesError: If the event's programme is empty.
                Checked before completeness.
            EventNotPublishableError: Naming the first missing field in the
                order date, ticket link, venue, programme.
        """
        eid = parse_id(EventId, event_id)
        logger.info("publish event", extra={"operation": "event.publish", "event_id": str(eid)})
        with self._uow.atomic():
            event = self._events.get(eid, lock=True)
            validate(event, "event")

            if event.programme_id is not None:
                details = self._programmes.get_with_details(event.programme_id, lock=True)
                if details.piece_count < 1:
                    logger.warning(
                        "publish event rejected",
                        extra={"reason": "PROGRAMME_HAS_NO_PIECES"},
                    )
                    raise ProgrammeHasNoPiecesError()

            # The venue row stays locked until commit, like the programme row.
            if event.venue_id is not None:
                self._venues.get_with_details(event.venue_id, lock=True)

            try:
                event.ensure_publishable()
            except FieldError as err:
                logger.warning(
                    "publish event rejected",
                    extra={"reason": str(err), "field": err.field},
                )
                raise EventNotPublishableError(err) from err

            self._events.set_status(eid, EventStatus.PUBLISHED)

    def archive(self, event_id: str) -> None:
        """Archive an event from any state."""
        eid = parse_id(EventId, event_id)
        logger.info("archive event", extra={"operation": "event.archive", "event_id": str(eid)})
        self._events.set_status(eid, EventStatus.ARCHIVED)

    def delete(self, event_id: str) -> None:
        """Delete an event unless it is published.

        Raises:
            EventProtectedError: If the event is published.
        """
        eid = parse_id(EventId, event_id)
        logger.info("delete event", extra={"operation": "event.delete", "event_id": str(eid)})
        with self._uow.atomic():
            event = self._events.get(eid, lock=True)
            if event.status == EventStatus.PUBLISHED:
                logger.warning("delete event blocked", extra={"reason": "EVENT_PROTECTED"})
                raise EventProtectedError()
            self._events.delete(eid)

    def _programme_of(self, event: Event) -> ProgrammeWithPieces | None:
        if event.programme_id is None:
            return None
        return ProgrammeWithPieces(
            programme=self._programmes.get(event.programme_id),
            pieces=self._programmes.list_pieces_in_order(event.programme_id),
        )

"""Django ORM implementation of the cms stores.

Each store converts ORM rows to domain models at its boundary. Reference
counts are computed with separate COUNT queries rather than annotations when
a row lock is requested, because PostgreSQL refuses FOR UPDATE together with
GROUP BY.
"""

from collections.abc import Sequence
from contextlib import AbstractContextManager

from django.db import transaction
from django.db.models import Count, F, ProtectedError, Q, QuerySet
from django.utils import timezone

from cms import models
from cms.domain import (
    Biography,
    BiographyVariant,
    Composer,
    ComposerId,
    ComposerWithDetails,
    Event,
    EventId,
    EventStatus,
    EventWithTimestamps,
    Piece,
    PieceId,
    PieceWithDetails,
    Programme,
    ProgrammeId,
    ProgrammePiece,
    ProgrammeWithDetails,
    Timeframe,
    Venue,
    VenueId,
    VenueWithDetails,
)
from cms.domain.errors import (
    ComposerProtectedError,
    InvariantViolationError,
    PieceProtectedError,
    ResourceNotFoundError,
)
from cms.signals import programme_pieces_replaced
from cms.stores.interfaces import (
    BiographyStore,
    ComposerStore,
    EventStore,
    PieceStore,
    ProgrammeStore,
    UnitOfWork,
    VenueStore,
)

PUBLISHED = Q(events__status=models.Event.Status.PUBLISHED)


class DjangoUnitOfWork(UnitOfWork):
    """Transaction boundary backed by ``django.db.transaction.atomic``."""

    def __init__(self, using: str | None = None) -> None:
        self._using = using

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic(using=self._using)


def _fetch(queryset: QuerySet, pk, resource: str, *, lock: bool = False):
    if lock:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(pk=pk)
    except queryset.model.DoesNotExist:
        raise ResourceNotFoundError(resource) from None


def _require(model, pk, resource: str) -> None:
    if pk is not None and not model.objects.filter(pk=pk).exists():
        raise ResourceNotFoundError(resource)


def _check_deleted(deleted: dict[str, int], label: str, resource: str) -> None:
    rows = deleted.get(label, 0)
    if rows == 0:
        raise ResourceNotFoundError(resource)
    if rows > 1:
        raise InvariantViolationError(f"{rows} {resource} rows deleted")


def _value(entity_id):
    return None if entity_id is None else entity_id.value


def _to_composer(row: models.Composer) -> Composer:
    return Composer(
        id=ComposerId(row.id),
        full_name=row.full_name,
        short_name=row.short_name,
    )


def _to_piece(row: models.Piece) -> Piece:
    return Piece(
        id=PieceId(row.id),
        title=row.title,
        composer_id=ComposerId(row.composer_id),
    )


def _to_programme(row: models.Programme) -> Programme:
    return Programme(id=ProgrammeId(row.id), title=row.title)


def _to_venue(row: models.Venue) -> Venue:
    return Venue(
        id=VenueId(row.id),
        name=row.name,
        full_address=row.full_address,
        short_address=row.short_address,
    )


def _to_event(row: models.Event) -> Event:
    return Event(
        id=EventId(row.id),
        title=row.title,
        date=row.date,
        ticket_link=row.ticket_link,
        venue_id=None if row.venue_id is None else VenueId(row.venue_id),
        programme_id=(
            None if row.programme_id is None else ProgrammeId(row.programme_id)
        ),
        status=EventStatus(row.status),
        notes=row.notes,
    )


def _to_programme_piece(row: models.ProgrammePiece) -> ProgrammePiece:
    return ProgrammePiece(
        piece=_to_piece(row.piece),
        composer=_to_composer(row.piece.composer),
        sequence=row.sequence,
    )


class DjangoComposerStore(ComposerStore):
    """Composer store using Django ORM."""

    def get(self, composer_id: ComposerId) -> Composer:
        return _to_composer(
            _fetch(models.Composer.objects, composer_id.value, "composer")
        )

    def get_with_details(
        self, composer_id: ComposerId, *, lock: bool = False
    ) -> ComposerWithDetails:
        row = _fetch(models.Composer.objects, composer_id.value, "composer", lock=lock)
        return ComposerWithDetails(
            composer=_to_composer(row),
            piece_count=models.Piece.objects.filter(composer_id=row.id).count(),
        )

    def list_with_details(self) -> list[ComposerWithDetails]:
        rows = models.Composer.objects.annotate(piece_count=Count("pieces"))
        return [
            ComposerWithDetails(composer=_to_composer(row), piece_count=row.piece_count)
            for row in rows
        ]

    def create(self, composer: Composer) -> Composer:
        row = models.Composer.objects.create(
            full_name=composer.full_name,
            short_name=composer.short_name,
        )
        return _to_composer(row)

    def update(self, composer: Composer) -> Composer:
        row = _fetch(models.Composer.objects, _value(composer.id), "composer")
        row.full_name = composer.full_name
        row.short_name = composer.short_name
        row.save(update_fields=["full_name", "short_name"])
        return _to_composer(row)

    def delete(self, composer_id: ComposerId) -> None:
        # A piece added after the guard read still trips PROTECT.
        try:
            _, deleted = models.Composer.objects.filter(pk=composer_id.value).delete()
        except ProtectedError:
            raise ComposerProtectedError() from None
        _check_deleted(deleted, "cms.Composer", "composer")


class DjangoPieceStore(PieceStore):
    """Piece store using Django ORM."""

    def get(self, piece_id: PieceId) -> Piece:
        return _to_piece(_fetch(models.Piece.objects, piece_id.value, "piece"))

    def get_with_details(
        self, piece_id: PieceId, *, lock: bool = False
    ) -> PieceWithDetails:
        row = _fetch(models.Piece.objects, piece_id.value, "piece", lock=lock)
        programme_count = (
            models.ProgrammePiece.objects.filter(piece_id=row.id)
            .values("programme_id")
            .distinct()
            .count()
        )
        return PieceWithDetails(piece=_to_piece(row), programme_count=programme_count)

    def list_with_details(self) -> list[PieceWithDetails]:
        rows = models.Piece.objects.annotate(
            programme_count=Count("programme_pieces__programme", distinct=True)
        )
        return [
            PieceWithDetails(piece=_to_piece(row), programme_count=row.programme_count)
            for row in rows
        ]

    def create(self, piece: Piece) -> Piece:
        _require(models.Composer, _value(piece.composer_id), "composer")
        row = models.Piece.objects.create(
            title=piece.title,
            composer_id=_value(piece.composer_id),
        )
        return _to_piece(row)

    def update(self, piece: Piece) -> Piece:
        row = _fetch(models.Piece.objects, _value(piece.id), "piece")
        _require(models.Composer, _value(piece.composer_id), "composer")
        row.title = piece.title
        row.composer_id = _value(piece.composer_id)
        row.save(update_fields=["title", "composer"])
        return _to_piece(row)

    def delete(self, piece_id: PieceId) -> None:
        try:
            _, deleted = models.Piece.objects.filter(pk=piece_id.value).delete()
        except ProtectedError:
            raise PieceProtectedError() from None
        _check_deleted(deleted, "cms.Piece", "piece")


class DjangoVenueStore(VenueStore):
    """Venue store using Django ORM."""

    def get(self, venue_id: VenueId) -> Venue:
        return _to_venue(_fetch(models.Venue.objects, venue_id.value, "venue"))

    def get_with_details(
        self, venue_id: VenueId, *, lock: bool = False
    ) -> VenueWithDetails:
        row = _fetch(models.Venue.objects, venue_id.value, "venue", lock=lock)
        event_count = models.Event.objects.filter(
            venue_id=row.id, status=models.Event.Status.PUBLISHED
        ).count()
        return VenueWithDetails(venue=_to_venue(row), event_count=event_count)

    def list_with_details(self) -> list[VenueWithDetails]:
        rows = models.Venue.objects.annotate(event_count=Count("events", filter=PUBLISHED))
        return [
            VenueWithDetails(venue=_to_venue(row), event_count=row.event_count)
            for row in rows
        ]

    def create(self, venue: Venue) -> Venue:
        row = models.Venue.objects.create(
            name=venue.name,
            full_address=venue.full_address,
            short_address=venue.short_address,
        )
        return _to_venue(row)

    def update(self, venue: Venue) -> Venue:
        row = _fetch(models.Venue.objects, _value(venue.id), "venue")
        row.name = venue.name
        row.full_address = venue.full_address
        row.short_address = venue.short_address
        row.save(update_fields=["name", "full_address", "short_address"])
        return _to_venue(row)

    def delete(self, venue_id: VenueId) -> None:
        _, deleted = models.Venue.objects.filter(pk=venue_id.value).delete()
        _check_deleted(deleted, "cms.Venue", "venue")


class DjangoProgrammeStore(ProgrammeStore):
    """Programme store using Django ORM."""

    def get(self, programme_id: ProgrammeId) -> Programme:
        return _to_programme(
            _fetch(models.Programme.objects, programme_id.value, "programme")
        )

    def get_with_details(
        self, programme_id: ProgrammeId, *, lock: bool = False
    ) -> ProgrammeWithDetails:
        row = _fetch(
            models.Programme.objects, programme_id.value, "programme", lock=lock
        )
        return ProgrammeWithDetails(
            programme=_to_programme(row),
            piece_count=models.ProgrammePiece.objects.filter(
                programme_id=row.id
            ).count(),
            event_count=models.Event.objects.filter(
                programme_id=row.id, status=models.Event.Status.PUBLISHED
            ).count(),
        )

    def list_with_details(self) -> list[ProgrammeWithDetails]:
        rows = models.Programme.objects.annotate(
            piece_count=Count("programme_pieces", distinct=True),
            event_count=Count("events", filter=PUBLISHED, distinct=True),
        )
        return [
            ProgrammeWithDetails(
                programme=_to_programme(row),
                piece_count=row.piece_count,
                event_count=row.event_count,
            )
            for row in rows
        ]

    def list_pieces_in_order(
        self, programme_id: ProgrammeId
    ) -> tuple[ProgrammePiece, ...]:
        rows = (
            models.ProgrammePiece.objects.filter(programme_id=programme_id.value)
            .select_related("piece__composer")
            .order_by("sequence")
        )
        return tuple(_to_programme_piece(row) for row in rows)

    def replace_pieces(
        self, programme_id: ProgrammeId, piece_ids: Sequence[PieceId]
    ) -> tuple[ProgrammePiece, ...]:
        wanted = {piece_id.value for piece_id in piece_ids}
        found = set(
            models.Piece.objects.filter(pk__in=wanted).values_list("pk", flat=True)
        )
        if wanted - found:
            raise ResourceNotFoundError("piece")

        models.ProgrammePiece.objects.filter(programme_id=programme_id.value).delete()
        models.ProgrammePiece.objects.bulk_create(
            models.ProgrammePiece(
                programme_id=programme_id.value,
                piece_id=piece_id.value,
                sequence=index,
            )
            for index, piece_id in enumerate(piece_ids, start=1)
        )
        programme_pieces_replaced.send(sender=self.__class__, programme_id=programme_id)
        return self.list_pieces_in_order(programme_id)

    def create(self, programme: Programme) -> Programme:
        return _to_programme(models.Programme.objects.create(title=programme.title))

    def update(self, programme: Programme) -> Programme:
        row = _fetch(models.Programme.objects, _value(programme.id), "programme")
        row.title = programme.title
        row.save(update_fields=["title"])
        return _to_programme(row)

    def delete(self, programme_id: ProgrammeId) -> None:
        _, deleted = models.Programme.objects.filter(pk=programme_id.value).delete()
        _check_deleted(deleted, "cms.Programme", "programme")


class DjangoEventStore(EventStore):
    """Event store using Django ORM."""

    def get(self, event_id: EventId, *, lock: bool = False) -> Event:
        return _to_event(_fetch(models.Event.objects, event_id.value, "event", lock=lock))

    def _filtered(
        self,
        status: EventStatus | None,
        timeframe: Timeframe | None,
    ) -> QuerySet:
        queryset = models.Event.objects.all()
        if status is not None:
            queryset = queryset.filter(status=status.value)
        if timeframe == Timeframe.UPCOMING:
            queryset = queryset.filter(date__gte=timezone.now())
        elif timeframe == Timeframe.PAST:
            queryset = queryset.filter(date__lt=timezone.now())
        return queryset.order_by(F("date").desc(nulls_last=True), "-created_at")

    def list_events(
        self,
        status: EventStatus | None = None,
        timeframe: Timeframe | None = None,
    ) -> list[Event]:
        return [_to_event(row) for row in self._filtered(status, timeframe)]

    def list_with_timestamps(
        self,
        status: EventStatus | None = None,
        timeframe: Timeframe | None = None,
    ) -> list[EventWithTimestamps]:
        return [
            EventWithTimestamps(
                event=_to_event(row),
                created_at=row.created_at,
                updated_at=row.updated_at,
            )
            for row in self._filtered(status, timeframe)
        ]

    def create(self, event: Event) -> Event:
        _require(models.Venue, _value(event.venue_id), "venue")
        _require(models.Programme, _value(event.programme_id), "programme")
        row = models.Event.objects.create(
            title=event.title,
            date=event.date,
            ticket_link=event.ticket_link,
            venue_id=_value(event.venue_id),
            programme_id=_value(event.programme_id),
            status=EventStatus(event.status).value,
            notes=event.notes,
        )
        return _to_event(row)

    def update(self, event: Event) -> Event:
        row = _fetch(models.Event.objects, _value(event.id), "event")
        _require(models.Venue, _value(event.venue_id), "venue")
        _require(models.Programme, _value(event.programme_id), "programme")
        row.title = event.title
        row.date = event.date
        row.ticket_link = event.ticket_link
        row.venue_id = _value(event.venue_id)
        row.programme_id = _value(event.programme_id)
        row.status = EventStatus(event.status).value
        row.notes = event.notes
        row.save()
        return _to_event(row)

    def set_status(self, event_id: EventId, status: EventStatus) -> None:
        row = _fetch(models.Event.objects, event_id.value, "event")
        row.status = status.value
        row.save(update_fields=["status", "updated_at"])

    def delete(self, event_id: EventId) -> None:
        _, deleted = models.Event.objects.filter(pk=event_id.value).delete()
        _check_deleted(deleted, "cms.Event", "event")


class DjangoBiographyStore(BiographyStore):
    """Biography store using Django ORM."""

    def get(self, variant: BiographyVariant) -> Biography:
        row = _fetch(models.Biography.objects, variant.value, "biography")
        return Biography(content=row.content, variant=BiographyVariant(row.variant))

    def upsert(self, biography: Biography) -> Biography:
        row, _ = models.Biography.objects.update_or_create(
            variant=biography.variant.value,
            defaults={"content": biography.content},
        )
        return Biography(content=row.content, variant=BiographyVariant(row.variant))

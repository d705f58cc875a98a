"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Lookups by id raise
ResourceNotFoundError when no row matches, and writes that touch an
unexpected number of rows raise InvariantViolationError. Any other storage
failure propagates unchanged.

Methods taking ``lock=True`` hold a row lock on the looked-up row until the
surrounding unit of work ends, so a guard read and the write it protects see
the same state.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager

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


class UnitOfWork(ABC):
    """Interface for the transaction boundary of composite operations."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager that commits on clean exit and rolls back
        when the block raises."""
        ...


class ComposerStore(ABC):
    """Interface for composer persistence operations."""

    @abstractmethod
    def get(self, composer_id: ComposerId) -> Composer:
        """Return a composer by ID."""
        ...

    @abstractmethod
    def get_with_details(
        self, composer_id: ComposerId, *, lock: bool = False
    ) -> ComposerWithDetails:
        """Return a composer with the number of pieces attributed to it."""
        ...

    @abstractmethod
    def list_with_details(self) -> list[ComposerWithDetails]:
        """Return all composers with piece counts, oldest first."""
        ...

    @abstractmethod
    def create(self, composer: Composer) -> Composer:
        """Insert a composer and return it with its assigned ID."""
        ...

    @abstractmethod
    def update(self, composer: Composer) -> Composer:
        """Overwrite the composer identified by ``composer.id``."""
        ...

    @abstractmethod
    def delete(self, composer_id: ComposerId) -> None:
        ...


class PieceStore(ABC):
    """Interface for piece persistence operations."""

    @abstractmethod
    def get(self, piece_id: PieceId) -> Piece:
        """Return a piece by ID."""
        ...

    @abstractmethod
    def get_with_details(
        self, piece_id: PieceId, *, lock: bool = False
    ) -> PieceWithDetails:
        """Return a piece with the number of programmes that include it."""
        ...

    @abstractmethod
    def list_with_details(self) -> list[PieceWithDetails]:
        """Return all pieces with programme counts, oldest first."""
        ...

    @abstractmethod
    def create(self, piece: Piece) -> Piece:
        ...

    @abstractmethod
    def update(self, piece: Piece) -> Piece:
        ...

    @abstractmethod
    def delete(self, piece_id: PieceId) -> None:
        ...


class VenueStore(ABC):
    """Interface for venue persistence operations."""

    @abstractmethod
    def get(self, venue_id: VenueId) -> Venue:
        """Return a venue by ID."""
        ...

    @abstractmethod
    def get_with_details(
        self, venue_id: VenueId, *, lock: bool = False
    ) -> VenueWithDetails:
        """Return a venue with the number of published events held there."""
        ...

    @abstractmethod
    def list_with_details(self) -> list[VenueWithDetails]:
        ...

    @abstractmethod
    def create(self, venue: Venue) -> Venue:
        ...

    @abstractmethod
    def update(self, venue: Venue) -> Venue:
        ...

    @abstractmethod
    def delete(self, venue_id: VenueId) -> None:
        ...


class ProgrammeStore(ABC):
    """Interface for programme and programme-piece persistence operations."""

    @abstractmethod
    def get(self, programme_id: ProgrammeId) -> Programme:
        """Return a programme's metadata by ID."""
        ...

    @abstractmethod
    def get_with_details(
        self, programme_id: ProgrammeId, *, lock: bool = False
    ) -> ProgrammeWithDetails:
        """Return a programme with its piece count and published event count."""
        ...

    @abstractmethod
    def list_with_details(self) -> list[ProgrammeWithDetails]:
        ...

    @abstractmethod
    def list_pieces_in_order(
        self, programme_id: ProgrammeId
    ) -> tuple[ProgrammePiece, ...]:
        """Return the programme's pieces joined with their composers, ordered
        by sequence ascending."""
        ...

    @abstractmethod
    def replace_pieces(
        self, programme_id: ProgrammeId, piece_ids: Sequence[PieceId]
    ) -> tuple[ProgrammePiece, ...]:
        """Replace the programme's pieces with ``piece_ids``, numbering them
        1..N by position, and return the new ordered set. Raises
        ResourceNotFoundError if any ID matches no piece."""
        ...

    @abstractmethod
    def create(self, programme: Programme) -> Programme:
        ...

    @abstractmethod
    def update(self, programme: Programme) -> Programme:
        ...

    @abstractmethod
    def delete(self, programme_id: ProgrammeId) -> None:
        ...


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def get(self, event_id: EventId, *, lock: bool = False) -> Event:
        """Return an event by ID."""
        ...

    @abstractmethod
    def list_events(
        self,
        status: EventStatus | None = None,
        timeframe: Timeframe | None = None,
    ) -> list[Event]:
        """Return events matching the filters, most recent date first."""
        ...

    @abstractmethod
    def list_with_timestamps(
        self,
        status: EventStatus | None = None,
        timeframe: Timeframe | None = None,
    ) -> list[EventWithTimestamps]:
        ...

    @abstractmethod
    def create(self, event: Event) -> Event:
        ...

    @abstractmethod
    def update(self, event: Event) -> Event:
        """Overwrite every field of the event identified by ``event.id``."""
        ...

    @abstractmethod
    def set_status(self, event_id: EventId, status: EventStatus) -> None:
        ...

    @abstractmethod
    def delete(self, event_id: EventId) -> None:
        ...


class BiographyStore(ABC):
    """Interface for biography persistence operations."""

    @abstractmethod
    def get(self, variant: BiographyVariant) -> Biography:
        ...

    @abstractmethod
    def upsert(self, biography: Biography) -> Biography:
        """Write the biography for its variant, creating the row if needed."""
        ...

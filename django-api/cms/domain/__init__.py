from cms.domain.intents import ComposerCommand, Intent, Operation, PieceCommand, VenueCommand
from cms.domain.models import (
    Biography,
    Composer,
    ComposerWithDetails,
    Event,
    EventWithProgramme,
    EventWithTimestamps,
    Piece,
    PieceWithDetails,
    Programme,
    ProgrammePiece,
    ProgrammeWithDetails,
    ProgrammeWithPieces,
    Venue,
    VenueWithDetails,
)
from cms.domain.value_objects import (
    BiographyVariant,
    ComposerId,
    EventId,
    EventStatus,
    PieceId,
    ProgrammeId,
    Timeframe,
    VenueId,
)

__all__ = [
    "Biography",
    "BiographyVariant",
    "Composer",
    "ComposerCommand",
    "ComposerId",
    "ComposerWithDetails",
    "Event",
    "EventId",
    "EventStatus",
    "EventWithProgramme",
    "EventWithTimestamps",
    "Intent",
    "Operation",
    "Piece",
    "PieceCommand",
    "PieceId",
    "PieceWithDetails",
    "Programme",
    "ProgrammeId",
    "ProgrammePiece",
    "ProgrammeWithDetails",
    "ProgrammeWithPieces",
    "Timeframe",
    "Venue",
    "VenueCommand",
    "VenueId",
    "VenueWithDetails",
]

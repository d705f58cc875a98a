from cms.services.biography_service import BiographyService
from cms.services.composer_service import ComposerService
from cms.services.event_service import EventService
from cms.services.piece_service import PieceService
from cms.services.programme_service import ProgrammeService
from cms.services.venue_service import VenueService

__all__ = [
    "BiographyService",
    "ComposerService",
    "EventService",
    "PieceService",
    "ProgrammeService",
    "VenueService",
]

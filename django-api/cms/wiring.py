"""Service construction for the HTTP adapter.

Views never build stores themselves; they ask for a fully wired service here.
"""

from cms.services import (
    BiographyService,
    ComposerService,
    EventService,
    PieceService,
    ProgrammeService,
    VenueService,
)
from cms.stores import (
    DjangoBiographyStore,
    DjangoComposerStore,
    DjangoEventStore,
    DjangoPieceStore,
    DjangoProgrammeStore,
    DjangoUnitOfWork,
    DjangoVenueStore,
)


def composer_service() -> ComposerService:
    return ComposerService(DjangoComposerStore(), DjangoUnitOfWork())


def piece_service() -> PieceService:
    return PieceService(DjangoPieceStore(), DjangoComposerStore(), DjangoUnitOfWork())


def programme_service() -> ProgrammeService:
    return ProgrammeService(DjangoProgrammeStore(), DjangoUnitOfWork())


def venue_service() -> VenueService:
    return VenueService(DjangoVenueStore(), DjangoUnitOfWork())


def event_service() -> EventService:
    return EventService(
        DjangoEventStore(),
        DjangoProgrammeStore(),
        DjangoVenueStore(),
        DjangoUnitOfWork(),
    )


def biography_service() -> BiographyService:
    return BiographyService(DjangoBiographyStore())

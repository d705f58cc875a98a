from cms.stores.django_store import (
    DjangoBiographyStore,
    DjangoComposerStore,
    DjangoEventStore,
    DjangoPieceStore,
    DjangoProgrammeStore,
    DjangoUnitOfWork,
    DjangoVenueStore,
)

__all__ = [
    "DjangoBiographyStore",
    "DjangoComposerStore",
    "DjangoEventStore",
    "DjangoPieceStore",
    "DjangoProgrammeStore",
    "DjangoUnitOfWork",
    "DjangoVenueStore",
]

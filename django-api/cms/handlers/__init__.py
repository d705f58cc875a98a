from cms.handlers.views import (
    BiographyView,
    ComposerDetailView,
    ComposerListView,
    EventDetailView,
    EventListView,
    EventNotesView,
    EventTransitionView,
    PieceDetailView,
    PieceListView,
    ProgrammeDetailView,
    ProgrammeListView,
    ProgrammePiecesView,
    VenueDetailView,
    VenueListView,
)

__all__ = [
    "BiographyView",
    "ComposerDetailView",
    "ComposerListView",
    "EventDetailView",
    "EventListView",
    "EventNotesView",
    "EventTransitionView",
    "PieceDetailView",
    "PieceListView",
    "ProgrammeDetailView",
    "ProgrammeListView",
    "ProgrammePiecesView",
    "VenueDetailView",
    "VenueListView",
]

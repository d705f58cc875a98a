from django.urls import path

from cms.handlers import (
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

urlpatterns = [
    path("composers", ComposerListView.as_view(), name="composer-list"),
    path("composers/<str:composer_id>", ComposerDetailView.as_view(), name="composer-detail"),
    path("pieces", PieceListView.as_view(), name="piece-list"),
    path("pieces/<str:piece_id>", PieceDetailView.as_view(), name="piece-detail"),
    path("venues", VenueListView.as_view(), name="venue-list"),
    path("venues/<str:venue_id>", VenueDetailView.as_view(), name="venue-detail"),
    path("programmes", ProgrammeListView.as_view(), name="programme-list"),
    path(
        "programmes/<str:programme_id>",
        ProgrammeDetailView.as_view(),
        name="programme-detail",
    ),
    path(
        "programmes/<str:programme_id>/pieces",
        ProgrammePiecesView.as_view(),
        name="programme-pieces",
    ),
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/notes", EventNotesView.as_view(), name="event-notes"),
    path(
        "events/<str:event_id>/draft",
        EventTransitionView.as_view(transition="draft"),
        name="event-draft",
    ),
    path(
        "events/<str:event_id>/publish",
        EventTransitionView.as_view(transition="publish"),
        name="event-publish",
    ),
    path(
        "events/<str:event_id>/archive",
        EventTransitionView.as_view(transition="archive"),
        name="event-archive",
    ),
    path("biography/<str:variant>", BiographyView.as_view(), name="biography"),
]

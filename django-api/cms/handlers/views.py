"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain errors to ``cms.handlers.errors.exception_handler``
- Never contain business logic

Event and biography reads are cached under generation-versioned keys (see
``cms.cache``); any content write makes every cached entry unreachable.
"""

from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from cms import cache as content_cache
from cms import wiring
from cms.handlers import serializers as s


def _created(payload: dict, temp_id: str | None) -> Response:
    if temp_id:
        payload = {**payload, "temp_id": temp_id}
    return Response(payload, status=status.HTTP_201_CREATED)


def _cached(key: str, build) -> dict | list:
    payload = cache.get(key)
    if payload is None:
        payload = build()
        cache.set(key, payload, content_cache.timeout())
    return payload


def _validated(serializer_class, request: Request):
    serializer = serializer_class(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer


class ComposerListView(APIView):
    """Handler for GET and POST /api/composers"""

    def get(self, request: Request) -> Response:
        composers = wiring.composer_service().list_composers()
        return Response(s.ComposerWithDetailsSerializer(composers, many=True).data)

    def post(self, request: Request) -> Response:
        command = _validated(s.ComposerIntentSerializer, request).to_command()
        composer = wiring.composer_service().create(command)
        return _created(s.ComposerSerializer(composer).data, command.temp_id)


class ComposerDetailView(APIView):
    """Handler for GET, PUT and DELETE /api/composers/{composer_id}"""

    def get(self, request: Request, composer_id: str) -> Response:
        composer = wiring.composer_service().get(composer_id)
        return Response(s.ComposerSerializer(composer).data)

    def put(self, request: Request, composer_id: str) -> Response:
        command = _validated(s.ComposerIntentSerializer, request).to_command(composer_id)
        composer = wiring.composer_service().update(command)
        return Response(s.ComposerSerializer(composer).data)

    def delete(self, request: Request, composer_id: str) -> Response:
        wiring.composer_service().delete(composer_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PieceListView(APIView):
    """Handler for GET and POST /api/pieces"""

    def get(self, request: Request) -> Response:
        pieces = wiring.piece_service().list_pieces()
        return Response(s.PieceWithDetailsSerializer(pieces, many=True).data)

    def post(self, request: Request) -> Response:
        command = _validated(s.PieceIntentSerializer, request).to_command()
        piece = wiring.piece_service().create(command)
        return _created(s.PieceSerializer(piece).data, command.temp_id)


class PieceDetailView(APIView):
    """Handler for GET, PUT and DELETE /api/pieces/{piece_id}"""

    def get(self, request: Request, piece_id: str) -> Response:
        piece = wiring.piece_service().get(piece_id)
        return Response(s.PieceSerializer(piece).data)

    def put(self, request: Request, piece_id: str) -> Response:
        command = _validated(s.PieceIntentSerializer, request).to_command(piece_id)
        piece = wiring.piece_service().update(command)
        return Response(s.PieceSerializer(piece).data)

    def delete(self, request: Request, piece_id: str) -> Response:
        wiring.piece_service().delete(piece_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class VenueListView(APIView):
    """Handler for GET and POST /api/venues"""

    def get(self, request: Request) -> Response:
        venues = wiring.venue_service().list_venues()
        return Response(s.VenueWithDetailsSerializer(venues, many=True).data)

    def post(self, request: Request) -> Response:
        command = _validated(s.VenueIntentSerializer, request).to_command()
        venue = wiring.venue_service().create(command)
        return _created(s.VenueSerializer(venue).data, command.temp_id)


class VenueDetailView(APIView):
    """Handler for GET, PUT and DELETE /api/venues/{venue_id}"""

    def get(self, request: Request, venue_id: str) -> Response:
        venue = wiring.venue_service().get(venue_id)
        return Response(s.VenueSerializer(venue).data)

    def put(self, request: Request, venue_id: str) -> Response:
        command = _validated(s.VenueIntentSerializer, request).to_command(venue_id)
        venue = wiring.venue_service().update(command)
        return Response(s.VenueSerializer(venue).data)

    def delete(self, request: Request, venue_id: str) -> Response:
        wiring.venue_service().delete(venue_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProgrammeListView(APIView):
    """Handler for GET and POST /api/programmes"""

    def get(self, request: Request) -> Response:
        programmes = wiring.programme_service().list_programmes()
        return Response(s.ProgrammeWithDetailsSerializer(programmes, many=True).data)

    def post(self, request: Request) -> Response:
        programme = _validated(s.ProgrammeInputSerializer, request).to_domain()
        programme = wiring.programme_service().create(programme)
        return Response(s.ProgrammeSerializer(programme).data, status=status.HTTP_201_CREATED)


class ProgrammeDetailView(APIView):
    """Handler for GET, PUT and DELETE /api/programmes/{programme_id}"""

    def get(self, request: Request, programme_id: str) -> Response:
        programme = wiring.programme_service().get(programme_id)
        return Response(s.ProgrammeWithPiecesSerializer(programme).data)

    def put(self, request: Request, programme_id: str) -> Response:
        programme = _validated(s.ProgrammeInputSerializer, request).to_domain()
        programme = wiring.programme_service().update(programme_id, programme)
        return Response(s.ProgrammeSerializer(programme).data)

    def delete(self, request: Request, programme_id: str) -> Response:
        wiring.programme_service().delete(programme_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProgrammePiecesView(APIView):
    """Handler for PUT /api/programmes/{programme_id}/pieces"""

    def put(self, request: Request, programme_id: str) -> Response:
        piece_ids = _validated(s.ProgrammePiecesInputSerializer, request).validated_data["pieces"]
        programme = wiring.programme_service().update_pieces(programme_id, piece_ids)
        return Response(s.ProgrammeWithPiecesSerializer(programme).data)


class EventListView(APIView):
    """Handler for GET and POST /api/events

    GET accepts optional ``status`` and ``timeframe`` query parameters.
    """

    def get(self, request: Request) -> Response:
        event_status = request.query_params.get("status") or None
        timeframe = request.query_params.get("timeframe") or None
        key = content_cache.versioned_key("events", event_status or "", timeframe or "")

        def build():
            events = wiring.event_service().list_with_timestamps(event_status, timeframe)
            return s.EventWithTimestampsSerializer(events, many=True).data

        return Response(_cached(key, build))

    def post(self, request: Request) -> Response:
        event = _validated(s.EventInputSerializer, request).to_domain()
        event = wiring.event_service().create(event)
        return Response(s.EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(APIView):
    """Handler for GET, PUT and DELETE /api/events/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        key = content_cache.versioned_key("events", event_id)

        def build():
            event = wiring.event_service().get(event_id)
            return s.EventWithProgrammeSerializer(event).data

        return Response(_cached(key, build))

    def put(self, request: Request, event_id: str) -> Response:
        event = _validated(s.EventInputSerializer, request).to_domain()
        event = wiring.event_service().update(event_id, event)
        return Response(s.EventWithProgrammeSerializer(event).data)

    def delete(self, request: Request, event_id: str) -> Response:
        wiring.event_service().delete(event_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class EventNotesView(APIView):
    """Handler for PUT /api/events/{event_id}/notes"""

    def put(self, request: Request, event_id: str) -> Response:
        notes = _validated(s.EventNotesInputSerializer, request).validated_data["notes"]
        event = wiring.event_service().update_notes(event_id, notes)
        return Response(s.EventSerializer(event).data)


class EventTransitionView(APIView):
    """Handler for PUT /api/events/{event_id}/{draft,publish,archive}"""

    transition = ""

    def put(self, request: Request, event_id: str) -> Response:
        getattr(wiring.event_service(), self.transition)(event_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class BiographyView(APIView):
    """Handler for GET and PUT /api/biography/{variant}"""

    def get(self, request: Request, variant: str) -> Response:
        key = content_cache.versioned_key("biography", variant)

        def build():
            biography = wiring.biography_service().get(variant)
            return s.BiographySerializer(biography).data

        return Response(_cached(key, build))

    def put(self, request: Request, variant: str) -> Response:
        content = _validated(s.BiographyInputSerializer, request).validated_data["content"]
        biography = wiring.biography_service().update(variant, content)
        return Response(s.BiographySerializer(biography).data)

"""Integration tests for the HTTP surface under /api.

These check request decoding, temp id echo and the mapping of domain errors
to status codes.
Run with: pytest tests/test_api.py -v
"""

from uuid import uuid4

import pytest
from rest_framework.test import APIClient

from cms import models


@pytest.mark.django_db
class TestComposerEndpoints:
    """Tests for /api/composers"""

    def test_create_echoes_temp_id(self, api_client: APIClient):
        """Given a temp_id on create, returns it alongside the new id."""
        response = api_client.post(
            "/api/composers",
            {
                "operation": "CREATE",
                "temp_id": "client-7",
                "data": {"full_name": "Maurice Ravel", "short_name": "Ravel"},
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["temp_id"] == "client-7"
        assert body["short_name"] == "Ravel"
        assert models.Composer.objects.filter(pk=body["id"]).exists()

    def test_create_without_temp_id(self, api_client: APIClient):
        """Given no temp_id, the response carries none."""
        response = api_client.post(
            "/api/composers",
            {"operation": "CREATE", "data": {"full_name": "Erik Satie", "short_name": "Satie"}},
        )
        assert response.status_code == 201
        assert "temp_id" not in response.json()

    def test_create_with_update_operation(self, api_client: APIClient):
        """Given an UPDATE intent on create, returns 400 OPERATION_MISMATCH."""
        response = api_client.post(
            "/api/composers",
            {"operation": "UPDATE", "data": {"full_name": "Erik Satie", "short_name": "Satie"}},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "OPERATION_MISMATCH"

    def test_create_with_unknown_operation(self, api_client: APIClient):
        """Given a DELETE intent, returns 400 INVALID_OPERATION."""
        response = api_client.post("/api/composers", {"operation": "DELETE"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_OPERATION"

    def test_create_blank_name(self, api_client: APIClient):
        """Given a blank name, returns 400 INVALID_RESOURCE with the rule."""
        response = api_client.post(
            "/api/composers",
            {"operation": "CREATE", "data": {"full_name": "", "short_name": "Satie"}},
        )
        assert response.status_code == 400
        assert response.json() == {
            "code": "INVALID_RESOURCE",
            "error": "Invalid resource",
            "detail": "composer full name is empty",
        }

    def test_update_uses_path_id(self, api_client: APIClient, composer):
        """PUT targets the composer named in the path."""
        response = api_client.put(
            f"/api/composers/{composer.id}",
            {"operation": "UPDATE", "data": {"full_name": "J. S. Bach", "short_name": "Bach"}},
        )
        assert response.status_code == 200
        composer.refresh_from_db()
        assert composer.full_name == "J. S. Bach"

    def test_get_invalid_id(self, api_client: APIClient):
        """Given an invalid UUID, returns 400."""
        response = api_client.get("/api/composers/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ID"

    def test_get_not_found(self, api_client: APIClient):
        """Given an unknown composer, returns 404."""
        response = api_client.get(f"/api/composers/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["error"] == "Composer not found"

    def test_delete_protected(self, api_client: APIClient, composer, piece):
        """Given a composer with pieces, returns 403."""
        response = api_client.delete(f"/api/composers/{composer.id}")
        assert response.status_code == 403
        assert response.json()["code"] == "COMPOSER_PROTECTED"

    def test_list(self, api_client: APIClient, piece):
        """Lists composers with piece counts."""
        response = api_client.get("/api/composers")
        assert response.status_code == 200
        assert response.json()[0]["piece_count"] == 1


@pytest.mark.django_db
class TestPieceEndpoints:
    """Tests for /api/pieces"""

    def test_create_with_nested_composer(self, api_client: APIClient):
        """A piece and its new composer are created from one request."""
        response = api_client.post(
            "/api/pieces",
            {
                "operation": "CREATE",
                "temp_id": "p-1",
                "data": {
                    "title": "Boléro",
                    "composer": {
                        "operation": "CREATE",
                        "data": {"full_name": "Maurice Ravel", "short_name": "Ravel"},
                    },
                },
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["temp_id"] == "p-1"
        assert str(models.Composer.objects.get().id) == body["composer_id"]

    def test_create_with_selected_composer(self, api_client: APIClient, composer):
        """A SELECT composer intent reuses the existing composer."""
        response = api_client.post(
            "/api/pieces",
            {
                "operation": "CREATE",
                "data": {
                    "title": "Partita No. 2",
                    "composer": {"operation": "SELECT", "id": str(composer.id)},
                },
            },
        )
        assert response.status_code == 201
        assert response.json()["composer_id"] == str(composer.id)

    def test_create_with_missing_composer(self, api_client: APIClient):
        """Selecting an unknown composer returns 404 and creates nothing."""
        response = api_client.post(
            "/api/pieces",
            {
                "operation": "CREATE",
                "data": {
                    "title": "Partita No. 2",
                    "composer": {"operation": "SELECT", "id": str(uuid4())},
                },
            },
        )
        assert response.status_code == 404
        assert not models.Piece.objects.exists()

    def test_create_without_data(self, api_client: APIClient):
        """A CREATE intent without data returns 400 MISSING_DATA."""
        response = api_client.post("/api/pieces", {"operation": "CREATE"})
        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_DATA"


@pytest.mark.django_db
class TestProgrammeEndpoints:
    """Tests for /api/programmes"""

    def test_replace_pieces(self, api_client: APIClient, programme, composer):
        """PUT /pieces returns the programme in the requested order."""
        second = models.Piece.objects.create(title="Italian Concerto", composer=composer)
        first = models.ProgrammePiece.objects.get().piece
        response = api_client.put(
            f"/api/programmes/{programme.id}/pieces",
            {"pieces": [str(second.id), str(first.id)]},
        )
        assert response.status_code == 200
        pieces = response.json()["pieces"]
        assert [(p["sequence"], p["title"]) for p in pieces] == [
            (1, "Italian Concerto"),
            (2, "Goldberg Variations"),
        ]
        assert pieces[0]["composer"] == "Bach"

    def test_replace_pieces_when_frozen(self, api_client: APIClient, programme, published_event):
        """Returns 403 PROGRAMME_IMMUTABLE once a published event uses it."""
        response = api_client.put(f"/api/programmes/{programme.id}/pieces", {"pieces": []})
        assert response.status_code == 403
        assert response.json()["code"] == "PROGRAMME_IMMUTABLE"

    def test_replace_pieces_malformed_body(self, api_client: APIClient, programme):
        """A non-UUID entry is a request-shape error."""
        response = api_client.put(
            f"/api/programmes/{programme.id}/pieces", {"pieces": ["x"]}
        )
        assert response.status_code == 400

    def test_get_programme(self, api_client: APIClient, programme):
        """Returns the programme with its pieces."""
        response = api_client.get(f"/api/programmes/{programme.id}")
        assert response.status_code == 200
        assert response.json()["pieces"][0]["sequence"] == 1


@pytest.mark.django_db
class TestEventEndpoints:
    """Tests for /api/events"""

    def test_create_event(self, api_client: APIClient, venue):
        """Returns 201 with a draft event."""
        response = api_client.post(
            "/api/events",
            {"title": "Matinee", "venue_id": str(venue.id), "status": "published"},
        )
        assert response.status_code == 201
        assert response.json()["status"] == "draft"

    def test_get_event_returns_programme(self, api_client: APIClient, complete_event):
        """Given an event with a programme, returns it embedded."""
        response = api_client.get(f"/api/events/{complete_event.id}")
        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Spring Recital"
        assert body["programme"]["title"] == "Bach Recital"

    def test_get_event_without_programme(self, api_client: APIClient):
        """An event without a programme has programme null."""
        event = models.Event.objects.create(title="TBA")
        response = api_client.get(f"/api/events/{event.id}")
        assert response.json()["programme"] is None

    def test_get_event_not_found(self, api_client: APIClient):
        """Given event does not exist, returns 404."""
        response = api_client.get(f"/api/events/{uuid4()}")
        assert response.status_code == 404

    def test_list_invalid_filter(self, api_client: APIClient):
        """An unknown status filter returns 400 INVALID_FILTER."""
        response = api_client.get("/api/events", {"status": "cancelled"})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_FILTER"

    def test_list_filters_by_status(self, api_client: APIClient, published_event):
        """Only events with the requested status are listed."""
        models.Event.objects.create(title="Draft idea")
        response = api_client.get("/api/events", {"status": "published"})
        assert [e["title"] for e in response.json()] == ["Spring Recital"]

    def test_publish_and_delete(self, api_client: APIClient, complete_event):
        """Publishing returns 204 and protects the event from deletion."""
        response = api_client.put(f"/api/events/{complete_event.id}/publish")
        assert response.status_code == 204

        response = api_client.delete(f"/api/events/{complete_event.id}")
        assert response.status_code == 403
        assert response.json()["code"] == "EVENT_PROTECTED"

    def test_publish_incomplete(self, api_client: APIClient):
        """An incomplete event returns 403 naming the missing field."""
        event = models.Event.objects.create(title="TBA")
        response = api_client.put(f"/api/events/{event.id}/publish")
        assert response.status_code == 403
        assert response.json()["detail"] == "event date is empty"

    def test_publish_empty_programme(self, api_client: APIClient, empty_programme):
        """An empty programme returns 400 PROGRAMME_HAS_NO_PIECES."""
        event = models.Event.objects.create(title="TBA", programme=empty_programme)
        response = api_client.put(f"/api/events/{event.id}/publish")
        assert response.status_code == 400
        assert response.json()["code"] == "PROGRAMME_HAS_NO_PIECES"

    def test_update_published(self, api_client: APIClient, published_event):
        """Editing a published event returns 403 EVENT_IMMUTABLE."""
        response = api_client.put(f"/api/events/{published_event.id}", {"title": "Renamed"})
        assert response.status_code == 403
        assert response.json()["code"] == "EVENT_IMMUTABLE"

    def test_update_notes_published(self, api_client: APIClient, published_event):
        """Notes stay editable after publishing."""
        response = api_client.put(
            f"/api/events/{published_event.id}/notes", {"notes": "Latecomers admitted"}
        )
        assert response.status_code == 200
        assert response.json()["notes"] == "Latecomers admitted"

    def test_archive_then_delete(self, api_client: APIClient, published_event):
        """Archived events can be deleted."""
        assert api_client.put(f"/api/events/{published_event.id}/archive").status_code == 204
        assert api_client.delete(f"/api/events/{published_event.id}").status_code == 204


@pytest.mark.django_db
class TestBiographyEndpoints:
    """Tests for /api/biography/{variant}"""

    def test_put_then_get(self, api_client: APIClient):
        """PUT stores the content that GET returns."""
        response = api_client.put("/api/biography/full", {"content": "Born in Vienna."})
        assert response.status_code == 200
        response = api_client.get("/api/biography/full")
        assert response.json() == {"variant": "full", "content": "Born in Vienna."}

    def test_unknown_variant(self, api_client: APIClient):
        """An unknown variant returns 400."""
        response = api_client.get("/api/biography/medium")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_BIOGRAPHY_VARIANT"

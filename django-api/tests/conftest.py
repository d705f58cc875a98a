"""Pytest configuration and shared fixtures."""

from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from cms import models, wiring


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def composer_service():
    return wiring.composer_service()


@pytest.fixture
def piece_service():
    return wiring.piece_service()


@pytest.fixture
def programme_service():
    return wiring.programme_service()


@pytest.fixture
def venue_service():
    return wiring.venue_service()


@pytest.fixture
def event_service():
    return wiring.event_service()


@pytest.fixture
def biography_service():
    return wiring.biography_service()


@pytest.fixture
def composer(db) -> models.Composer:
    return models.Composer.objects.create(
        full_name="Johann Sebastian Bach", short_name="Bach"
    )


@pytest.fixture
def piece(composer) -> models.Piece:
    return models.Piece.objects.create(title="Goldberg Variations", composer=composer)


@pytest.fixture
def venue(db) -> models.Venue:
    return models.Venue.objects.create(
        name="Wigmore Hall",
        full_address="36 Wigmore Street, London W1U 2BP",
        short_address="London",
    )


@pytest.fixture
def programme(piece) -> models.Programme:
    programme = models.Programme.objects.create(title="Bach Recital")
    models.ProgrammePiece.objects.create(programme=programme, piece=piece, sequence=1)
    return programme


@pytest.fixture
def empty_programme(db) -> models.Programme:
    return models.Programme.objects.create(title="To Be Announced")


@pytest.fixture
def complete_event(venue, programme) -> models.Event:
    """A draft event with every field publishing requires."""
    return models.Event.objects.create(
        title="Spring Recital",
        date=timezone.now() + timedelta(days=30),
        ticket_link="https://tickets.example.com/spring",
        venue=venue,
        programme=programme,
    )


@pytest.fixture
def published_event(complete_event) -> models.Event:
    complete_event.status = models.Event.Status.PUBLISHED
    complete_event.save()
    return complete_event

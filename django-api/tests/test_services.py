"""Service tests against the Django ORM stores.

These cover protection guards, the piece + composer composite and programme
piece replacement.
Run with: pytest tests/test_services.py -v
"""

from uuid import uuid4

import pytest

from cms import models
from cms.domain import (
    Composer,
    ComposerCommand,
    ComposerId,
    Intent,
    Operation,
    Piece,
    PieceCommand,
    PieceId,
    Programme,
    Venue,
    VenueCommand,
)
from cms.domain.errors import (
    ComposerProtectedError,
    InvalidBiographyVariantError,
    InvalidIdError,
    InvalidOperationError,
    InvalidResourceError,
    PieceProtectedError,
    ProgrammeImmutableError,
    ProgrammeProtectedError,
    ResourceNotFoundError,
    VenueProtectedError,
)
from cms.stores import DjangoComposerStore, DjangoPieceStore


def _create_composer(full_name="Ludwig van Beethoven", short_name="Beethoven"):
    return Intent(
        operation=Operation.CREATE,
        data=Composer(full_name=full_name, short_name=short_name),
    )


def _sequence(programme: models.Programme) -> list[tuple[int, str]]:
    rows = models.ProgrammePiece.objects.filter(programme=programme).order_by("sequence")
    return [(row.sequence, row.piece.title) for row in rows]


@pytest.mark.django_db
class TestComposerService:
    """Tests for ComposerService."""

    def test_create_composer(self, composer_service):
        """A CREATE intent inserts a composer."""
        composer = composer_service.create(ComposerCommand(composer=_create_composer()))
        row = models.Composer.objects.get(pk=composer.id.value)
        assert row.short_name == "Beethoven"

    def test_update_composer(self, composer_service, composer):
        """An UPDATE intent overwrites the targeted composer."""
        command = ComposerCommand(
            composer=Intent(
                operation=Operation.UPDATE,
                data=Composer(full_name="J. S. Bach", short_name="JSB"),
                target_id=composer_service.get(str(composer.id)).id,
            )
        )
        composer_service.update(command)
        composer.refresh_from_db()
        assert composer.short_name == "JSB"

    def test_get_invalid_id(self, composer_service):
        """A malformed id is rejected before the store."""
        with pytest.raises(InvalidIdError):
            composer_service.get("not-a-uuid")

    def test_get_missing(self, composer_service):
        """An unknown id is not found."""
        with pytest.raises(ResourceNotFoundError):
            composer_service.get(str(uuid4()))

    def test_list_counts_pieces(self, composer_service, piece):
        """Listed composers carry their piece counts."""
        (details,) = composer_service.list_composers()
        assert details.piece_count == 1

    def test_delete_protected_while_pieces_exist(self, composer_service, composer, piece):
        """A composer with pieces cannot be deleted."""
        with pytest.raises(ComposerProtectedError):
            composer_service.delete(str(composer.id))
        assert models.Composer.objects.filter(pk=composer.id).exists()

    def test_delete_unreferenced_composer(self, composer_service, composer):
        """A composer without pieces is deleted."""
        composer_service.delete(str(composer.id))
        assert not models.Composer.objects.filter(pk=composer.id).exists()

    def test_delete_missing(self, composer_service):
        """Deleting an unknown composer is not found."""
        with pytest.raises(ResourceNotFoundError):
            composer_service.delete(str(uuid4()))


@pytest.mark.django_db
class TestPieceService:
    """Tests for PieceService and its nested composer intent."""

    def test_create_piece_with_new_composer(self, piece_service):
        """Piece and composer are created together."""
        command = PieceCommand(
            piece=Intent(operation=Operation.CREATE, data=Piece(title="Moonlight Sonata")),
            composer=_create_composer(),
        )
        piece = piece_service.create(command)
        row = models.Piece.objects.select_related("composer").get(pk=piece.id.value)
        assert row.composer.short_name == "Beethoven"

    def test_create_piece_for_existing_composer(self, piece_service, composer):
        """A SELECT composer intent links the piece to that composer."""
        command = PieceCommand(
            piece=Intent(operation=Operation.CREATE, data=Piece(title="Cello Suite No. 1")),
            composer=Intent(operation=Operation.SELECT, target_id=composer.id),
        )
        piece = piece_service.create(command)
        assert piece.composer_id.value == composer.id
        assert models.Composer.objects.count() == 1

    def test_update_piece_and_composer(self, piece_service, piece, composer):
        """One UPDATE command can rename both the piece and its composer."""
        command = PieceCommand(
            piece=Intent(
                operation=Operation.UPDATE,
                data=Piece(title="Goldberg Variations, BWV 988"),
                target_id=piece.id,
            ),
            composer=Intent(
                operation=Operation.UPDATE,
                data=Composer(full_name="J. S. Bach", short_name="Bach"),
                target_id=composer.id,
            ),
        )
        piece_service.update(command)
        piece.refresh_from_db()
        composer.refresh_from_db()
        assert piece.title == "Goldberg Variations, BWV 988"
        assert composer.full_name == "J. S. Bach"

    def test_failed_piece_write_rolls_back_composer(self, piece_service):
        """A composer created for a piece that cannot be written is rolled back."""
        command = PieceCommand(
            piece=Intent(
                operation=Operation.UPDATE,
                data=Piece(title="Lost Piece"),
                target_id=uuid4(),
            ),
            composer=_create_composer(),
        )
        with pytest.raises(ResourceNotFoundError):
            piece_service.update(command)
        assert not models.Composer.objects.exists()

    def test_invalid_composer_intent_writes_nothing(self, piece_service):
        """A DELETE composer intent fails the whole command."""
        command = PieceCommand(
            piece=Intent(operation=Operation.CREATE, data=Piece(title="Fantasia")),
            composer=Intent(operation="DELETE"),
        )
        with pytest.raises(InvalidOperationError):
            piece_service.create(command)
        assert not models.Piece.objects.exists()

    def test_invalid_composer_payload(self, piece_service):
        """An invalid nested composer is an invalid resource."""
        command = PieceCommand(
            piece=Intent(operation=Operation.CREATE, data=Piece(title="Fantasia")),
            composer=_create_composer(full_name=""),
        )
        with pytest.raises(InvalidResourceError):
            piece_service.create(command)
        assert not models.Piece.objects.exists()

    def test_delete_protected_while_in_programme(self, piece_service, piece, programme):
        """A piece in a programme cannot be deleted."""
        with pytest.raises(PieceProtectedError):
            piece_service.delete(str(piece.id))

    def test_delete_unused_piece(self, piece_service, piece):
        """A piece in no programme is deleted."""
        piece_service.delete(str(piece.id))
        assert not models.Piece.objects.exists()

    def test_list_counts_distinct_programmes(self, piece_service, piece, programme):
        """A piece twice in one programme counts that programme once."""
        models.ProgrammePiece.objects.create(programme=programme, piece=piece, sequence=2)
        (details,) = piece_service.list_pieces()
        assert details.programme_count == 1


@pytest.mark.django_db
class TestStoreDeleteProtection:
    """Rows that appear after the guard read still block the delete."""

    def test_composer_delete_reports_protected(self, composer, piece):
        """PROTECT on pieces surfaces as ComposerProtectedError."""
        with pytest.raises(ComposerProtectedError):
            DjangoComposerStore().delete(ComposerId(composer.id))
        assert models.Composer.objects.filter(pk=composer.id).exists()

    def test_piece_delete_reports_protected(self, piece, programme):
        """PROTECT on programme rows surfaces as PieceProtectedError."""
        with pytest.raises(PieceProtectedError):
            DjangoPieceStore().delete(PieceId(piece.id))
        assert models.Piece.objects.filter(pk=piece.id).exists()

    def test_protected_delete_maps_to_403(
        self, api_client, composer, piece, monkeypatch
    ):
        """A composer delete that passes the guard but trips PROTECT is a 403."""
        monkeypatch.setattr("cms.services.composer_service.guard", lambda *a, **kw: None)
        response = api_client.delete(f"/api/composers/{composer.id}")
        assert response.status_code == 403
        assert response.json()["code"] == "COMPOSER_PROTECTED"


@pytest.mark.django_db
class TestVenueService:
    """Tests for VenueService."""

    def test_create_venue(self, venue_service):
        """A CREATE intent inserts a venue."""
        command = VenueCommand(
            venue=Intent(
                operation=Operation.CREATE,
                data=Venue(name="Barbican", full_address="Silk Street, London", short_address="London"),
            ),
            temp_id="tmp-1",
        )
        venue = venue_service.create(command)
        assert models.Venue.objects.get(pk=venue.id.value).name == "Barbican"

    def test_delete_protected_by_published_event(self, venue_service, venue, published_event):
        """A venue hosting a published event cannot be deleted."""
        with pytest.raises(VenueProtectedError):
            venue_service.delete(str(venue.id))

    def test_delete_detaches_draft_events(self, venue_service, venue, complete_event):
        """Draft events do not protect their venue; they lose the reference."""
        venue_service.delete(str(venue.id))
        complete_event.refresh_from_db()
        assert complete_event.venue_id is None

    def test_list_counts_only_published_events(self, venue_service, venue, complete_event):
        """Draft events are not counted."""
        (details,) = venue_service.list_venues()
        assert details.event_count == 0


@pytest.mark.django_db
class TestProgrammeService:
    """Tests for ProgrammeService."""

    def test_create_and_get(self, programme_service):
        """A new programme has no pieces."""
        created = programme_service.create(Programme(title="Late Night"))
        fetched = programme_service.get(str(created.id))
        assert fetched.programme.title == "Late Night"
        assert fetched.pieces == ()

    def test_create_invalid(self, programme_service):
        """A programme needs a title."""
        with pytest.raises(InvalidResourceError):
            programme_service.create(Programme(title=""))

    def test_update_pieces_follows_list_order(self, programme_service, composer, empty_programme):
        """Sequence numbers are 1..N in the order the ids were given."""
        p1, p2, p3 = (
            models.Piece.objects.create(title=title, composer=composer)
            for title in ("Prelude", "Fugue", "Toccata")
        )
        result = programme_service.update_pieces(
            str(empty_programme.id), [str(p3.id), str(p1.id), str(p2.id)]
        )
        assert [(slot.sequence, slot.piece.title) for slot in result.pieces] == [
            (1, "Toccata"),
            (2, "Prelude"),
            (3, "Fugue"),
        ]
        assert result.pieces[0].composer.short_name == "Bach"
        assert _sequence(empty_programme) == [(1, "Toccata"), (2, "Prelude"), (3, "Fugue")]

    def test_update_pieces_replaces_previous_set(self, programme_service, programme, composer):
        """Earlier rows are removed, not appended to."""
        encore = models.Piece.objects.create(title="Encore", composer=composer)
        programme_service.update_pieces(str(programme.id), [str(encore.id)])
        assert _sequence(programme) == [(1, "Encore")]

    def test_update_pieces_allows_repeats(self, programme_service, piece, empty_programme):
        """The same piece may take more than one slot."""
        result = programme_service.update_pieces(
            str(empty_programme.id), [str(piece.id), str(piece.id)]
        )
        assert [slot.sequence for slot in result.pieces] == [1, 2]

    def test_update_pieces_unknown_piece(self, programme_service, programme, piece):
        """An unknown piece id fails and leaves the old set in place."""
        with pytest.raises(ResourceNotFoundError):
            programme_service.update_pieces(str(programme.id), [str(piece.id), str(uuid4())])
        assert _sequence(programme) == [(1, "Goldberg Variations")]

    def test_update_pieces_invalid_id(self, programme_service, programme):
        """A malformed piece id is an invalid id."""
        with pytest.raises(InvalidIdError):
            programme_service.update_pieces(str(programme.id), ["nope"])

    def test_update_pieces_empty_list(self, programme_service, programme):
        """An empty list clears the programme."""
        result = programme_service.update_pieces(str(programme.id), [])
        assert result.pieces == ()
        assert _sequence(programme) == []

    def test_frozen_by_published_event(
        self, programme_service, programme, composer, published_event
    ):
        """A programme used by a published event rejects every edit."""
        extra = models.Piece.objects.create(title="Encore", composer=composer)
        with pytest.raises(ProgrammeImmutableError):
            programme_service.update_pieces(str(programme.id), [str(extra.id)])
        with pytest.raises(ProgrammeImmutableError):
            programme_service.update(str(programme.id), Programme(title="Renamed"))
        programme.refresh_from_db()
        assert programme.title == "Bach Recital"
        assert _sequence(programme) == [(1, "Goldberg Variations")]

    def test_draft_event_does_not_freeze(self, programme_service, programme, complete_event):
        """Only published events freeze a programme."""
        updated = programme_service.update(str(programme.id), Programme(title="Renamed"))
        assert updated.title == "Renamed"

    def test_delete_protected_by_published_event(
        self, programme_service, programme, published_event
    ):
        """A programme used by a published event cannot be deleted."""
        with pytest.raises(ProgrammeProtectedError):
            programme_service.delete(str(programme.id))

    def test_delete_removes_piece_rows(self, programme_service, programme, piece):
        """Deleting a programme removes its slots but keeps the pieces."""
        programme_service.delete(str(programme.id))
        assert not models.ProgrammePiece.objects.exists()
        assert models.Piece.objects.filter(pk=piece.id).exists()

    def test_list_counts(self, programme_service, programme, published_event):
        """Listed programmes carry piece and published event counts."""
        (details,) = programme_service.list_programmes()
        assert (details.piece_count, details.event_count) == (1, 1)


@pytest.mark.django_db
class TestBiographyService:
    """Tests for BiographyService."""

    def test_update_then_get(self, biography_service):
        """update writes the variant's content, creating the row."""
        biography_service.update("short", "Pianist.")
        biography_service.update("short", "Pianist and pedagogue.")
        assert biography_service.get("short").content == "Pianist and pedagogue."
        assert models.Biography.objects.count() == 1

    def test_get_before_first_write(self, biography_service):
        """A variant never written is not found."""
        with pytest.raises(ResourceNotFoundError):
            biography_service.get("full")

    def test_unknown_variant(self, biography_service):
        """Variants other than full and short are rejected."""
        with pytest.raises(InvalidBiographyVariantError):
            biography_service.update("medium", "...")

"""Serializers for request payloads and API responses.

Input serializers check request shape only. Field rules (blank names,
unknown operations, missing data) are left to the domain so that every
business rejection carries a domain error code.
"""

from rest_framework import serializers

from cms.domain import (
    Composer,
    ComposerCommand,
    ComposerId,
    Event,
    Intent,
    Piece,
    PieceCommand,
    PieceId,
    Programme,
    ProgrammeId,
    Venue,
    VenueCommand,
    VenueId,
)
from cms.services.common import parse_id


def _target(id_type, value):
    return None if value is None else parse_id(id_type, value)


def composer_intent(values: dict | None, target_id=None) -> Intent[Composer]:
    """Build a composer intent from validated intent fields."""
    values = values or {}
    data = values.get("data")
    return Intent(
        operation=values.get("operation"),
        data=None if data is None else Composer(
            full_name=data["full_name"],
            short_name=data["short_name"],
        ),
        target_id=_target(ComposerId, target_id or values.get("id")),
    )


def venue_intent(values: dict, target_id=None) -> Intent[Venue]:
    data = values.get("data")
    return Intent(
        operation=values.get("operation"),
        data=None if data is None else Venue(
            name=data["name"],
            full_address=data["full_address"],
            short_address=data["short_address"],
        ),
        target_id=_target(VenueId, target_id or values.get("id")),
    )


def piece_command(values: dict, target_id=None) -> PieceCommand:
    data = values.get("data")
    piece = Intent(
        operation=values.get("operation"),
        data=None if data is None else Piece(title=data["title"]),
        target_id=_target(PieceId, target_id or values.get("id")),
    )
    return PieceCommand(
        piece=piece,
        composer=composer_intent(None if data is None else data.get("composer")),
        temp_id=values.get("temp_id"),
    )


class IntentSerializer(serializers.Serializer):
    """Common intent envelope: ``{"operation", "id", "data"}``.

    ``operation`` is accepted as free text. Unknown tags are rejected by the
    resolver, not here.
    """

    operation = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    id = serializers.UUIDField(required=False, allow_null=True)
    temp_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)


class ComposerDataSerializer(serializers.Serializer):
    full_name = serializers.CharField(allow_blank=True, trim_whitespace=False, default="")
    short_name = serializers.CharField(allow_blank=True, trim_whitespace=False, default="")


class ComposerIntentSerializer(IntentSerializer):
    data = ComposerDataSerializer(required=False, allow_null=True)

    def to_command(self, target_id=None) -> ComposerCommand:
        return ComposerCommand(
            composer=composer_intent(self.validated_data, target_id),
            temp_id=self.validated_data.get("temp_id"),
        )


class VenueDataSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, trim_whitespace=False, default="")
    full_address = serializers.CharField(allow_blank=True, trim_whitespace=False, default="")
    short_address = serializers.CharField(allow_blank=True, trim_whitespace=False, default="")


class VenueIntentSerializer(IntentSerializer):
    data = VenueDataSerializer(required=False, allow_null=True)

    def to_command(self, target_id=None) -> VenueCommand:
        return VenueCommand(
            venue=venue_intent(self.validated_data, target_id),
            temp_id=self.validated_data.get("temp_id"),
        )


class PieceDataSerializer(serializers.Serializer):
    title = serializers.CharField(allow_blank=True, trim_whitespace=False, default="")
    composer = ComposerIntentSerializer(required=False, allow_null=True)


class PieceIntentSerializer(IntentSerializer):
    data = PieceDataSerializer(required=False, allow_null=True)

    def to_command(self, target_id=None) -> PieceCommand:
        return piece_command(self.validated_data, target_id)


class ProgrammeInputSerializer(serializers.Serializer):
    title = serializers.CharField(allow_blank=True, trim_whitespace=False, default="")

    def to_domain(self) -> Programme:
        return Programme(title=self.validated_data["title"])


class ProgrammePiecesInputSerializer(serializers.Serializer):
    """Ordered piece ids. Position in the list is the sequence."""

    pieces = serializers.ListField(child=serializers.UUIDField(), allow_empty=True)


class EventInputSerializer(serializers.Serializer):
    title = serializers.CharField(allow_blank=True, trim_whitespace=False, default="")
    date = serializers.DateTimeField(allow_null=True, default=None)
    ticket_link = serializers.CharField(allow_null=True, allow_blank=True, default=None)
    venue_id = serializers.UUIDField(allow_null=True, default=None)
    programme_id = serializers.UUIDField(allow_null=True, default=None)

    def to_domain(self) -> Event:
        values = self.validated_data
        return Event(
            title=values["title"],
            date=values["date"],
            ticket_link=values["ticket_link"],
            venue_id=_target(VenueId, values["venue_id"]),
            programme_id=_target(ProgrammeId, values["programme_id"]),
        )


class EventNotesInputSerializer(serializers.Serializer):
    notes = serializers.CharField(allow_null=True, allow_blank=True, trim_whitespace=False)


class BiographyInputSerializer(serializers.Serializer):
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)


class ComposerSerializer(serializers.Serializer):
    """Serializer for Composer domain model."""

    id = serializers.UUIDField()
    full_name = serializers.CharField()
    short_name = serializers.CharField()


class ComposerWithDetailsSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="composer.id")
    full_name = serializers.CharField(source="composer.full_name")
    short_name = serializers.CharField(source="composer.short_name")
    piece_count = serializers.IntegerField()


class PieceSerializer(serializers.Serializer):
    """Serializer for Piece domain model."""

    id = serializers.UUIDField()
    title = serializers.CharField()
    composer_id = serializers.UUIDField()


class PieceWithDetailsSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="piece.id")
    title = serializers.CharField(source="piece.title")
    composer_id = serializers.UUIDField(source="piece.composer_id")
    programme_count = serializers.IntegerField()


class VenueSerializer(serializers.Serializer):
    """Serializer for Venue domain model."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    full_address = serializers.CharField()
    short_address = serializers.CharField()


class VenueWithDetailsSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="venue.id")
    name = serializers.CharField(source="venue.name")
    full_address = serializers.CharField(source="venue.full_address")
    short_address = serializers.CharField(source="venue.short_address")
    event_count = serializers.IntegerField()


class ProgrammeSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()


class ProgrammeWithDetailsSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="programme.id")
    title = serializers.CharField(source="programme.title")
    piece_count = serializers.IntegerField()
    event_count = serializers.IntegerField()


class ProgrammePieceSerializer(serializers.Serializer):
    """A programme slot: the piece, its composer's short name and its position."""

    sequence = serializers.IntegerField()
    piece_id = serializers.UUIDField(source="piece.id")
    title = serializers.CharField(source="piece.title")
    composer_id = serializers.UUIDField(source="composer.id")
    composer = serializers.CharField(source="composer.short_name")


class ProgrammeWithPiecesSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="programme.id")
    title = serializers.CharField(source="programme.title")
    pieces = ProgrammePieceSerializer(many=True)


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField()
    title = serializers.CharField()
    date = serializers.DateTimeField(allow_null=True)
    ticket_link = serializers.CharField(allow_null=True)
    venue_id = serializers.UUIDField(allow_null=True)
    programme_id = serializers.UUIDField(allow_null=True)
    status = serializers.CharField(source="status.value")
    notes = serializers.CharField(allow_null=True)


class EventWithTimestampsSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="event.id")
    title = serializers.CharField(source="event.title")
    date = serializers.DateTimeField(source="event.date", allow_null=True)
    ticket_link = serializers.CharField(source="event.ticket_link", allow_null=True)
    venue_id = serializers.UUIDField(source="event.venue_id", allow_null=True)
    programme_id = serializers.UUIDField(source="event.programme_id", allow_null=True)
    status = serializers.CharField(source="event.status.value")
    notes = serializers.CharField(source="event.notes", allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class EventWithProgrammeSerializer(serializers.Serializer):
    id = serializers.UUIDField(source="event.id")
    title = serializers.CharField(source="event.title")
    date = serializers.DateTimeField(source="event.date", allow_null=True)
    ticket_link = serializers.CharField(source="event.ticket_link", allow_null=True)
    venue_id = serializers.UUIDField(source="event.venue_id", allow_null=True)
    programme_id = serializers.UUIDField(source="event.programme_id", allow_null=True)
    status = serializers.CharField(source="event.status.value")
    notes = serializers.CharField(source="event.notes", allow_null=True)
    programme = ProgrammeWithPiecesSerializer(allow_null=True)


class BiographySerializer(serializers.Serializer):
    variant = serializers.CharField(source="variant.value")
    content = serializers.CharField()

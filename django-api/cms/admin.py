"""Django admin for cms content.

Deletes and edits of existing rows go through the same services as the API,
so protection and mutability rules hold here too. Objects a guard would
refuse are shown without the delete or change controls.
"""

from django.contrib import admin
from django.db import transaction

from cms import domain, wiring
from cms.models import Biography, Composer, Event, Piece, Programme, ProgrammePiece, Venue

EVENT_FIELDS = ["title", "date", "ticket_link", "venue", "programme"]


def _has_published_events(obj) -> bool:
    return obj.events.filter(status=Event.Status.PUBLISHED).exists()


def _event_data(obj: Event) -> domain.Event:
    return domain.Event(
        title=obj.title,
        date=obj.date,
        ticket_link=obj.ticket_link,
        venue_id=None if obj.venue_id is None else domain.VenueId(obj.venue_id),
        programme_id=(
            None if obj.programme_id is None else domain.ProgrammeId(obj.programme_id)
        ),
    )


class ServiceAdmin(admin.ModelAdmin):
    """Delete through the model's service and hide deletes its guard refuses."""

    def service(self):
        raise NotImplementedError

    def is_protected(self, obj) -> bool:
        return False

    def has_delete_permission(self, request, obj=None):
        if obj is not None and self.is_protected(obj):
            return False
        return super().has_delete_permission(request, obj)

    def delete_model(self, request, obj):
        self.service().delete(str(obj.pk))

    def delete_queryset(self, request, queryset):
        service = self.service()
        for obj in queryset:
            service.delete(str(obj.pk))


class ProgrammePieceInline(admin.TabularInline):
    """Running order, replaced as a whole through the programme pieces endpoint."""

    model = ProgrammePiece
    extra = 0
    ordering = ["sequence"]
    fields = ["sequence", "piece"]
    readonly_fields = ["sequence", "piece"]

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Composer)
class ComposerAdmin(ServiceAdmin):
    list_display = ["full_name", "short_name", "created_at"]
    search_fields = ["full_name", "short_name"]

    def service(self):
        return wiring.composer_service()

    def is_protected(self, obj) -> bool:
        return obj.pieces.exists()


@admin.register(Piece)
class PieceAdmin(ServiceAdmin):
    list_display = ["title", "composer", "created_at"]
    list_filter = ["composer"]
    search_fields = ["title"]

    def service(self):
        return wiring.piece_service()

    def is_protected(self, obj) -> bool:
        return obj.programme_pieces.exists()


@admin.register(Programme)
class ProgrammeAdmin(ServiceAdmin):
    list_display = ["title", "created_at"]
    search_fields = ["title"]
    inlines = [ProgrammePieceInline]

    def service(self):
        return wiring.programme_service()

    def is_protected(self, obj) -> bool:
        return _has_published_events(obj)

    def has_change_permission(self, request, obj=None):
        if obj is not None and self.is_protected(obj):
            return False
        return super().has_change_permission(request, obj)

    def save_model(self, request, obj, form, change):
        if not change:
            super().save_model(request, obj, form, change)
            return
        self.service().update(str(obj.pk), domain.Programme(title=obj.title))


@admin.register(Venue)
class VenueAdmin(ServiceAdmin):
    list_display = ["name", "short_address", "created_at"]
    search_fields = ["name", "full_address"]

    def service(self):
        return wiring.venue_service()

    def is_protected(self, obj) -> bool:
        return _has_published_events(obj)


@admin.register(Event)
class EventAdmin(ServiceAdmin):
    list_display = ["title", "date", "venue", "programme", "status", "updated_at"]
    list_filter = ["status", "venue"]
    search_fields = ["title"]
    readonly_fields = ["status", "created_at", "updated_at"]

    def service(self):
        return wiring.event_service()

    def is_protected(self, obj) -> bool:
        return obj.status == Event.Status.PUBLISHED

    def get_readonly_fields(self, request, obj=None):
        # Only notes stay editable once an event leaves draft.
        if obj is not None and obj.status != Event.Status.DRAFT:
            return [*EVENT_FIELDS, *self.readonly_fields]
        return self.readonly_fields

    def save_model(self, request, obj, form, change):
        if not change:
            super().save_model(request, obj, form, change)
            return
        service = self.service()
        with transaction.atomic():
            if obj.status == Event.Status.DRAFT:
                service.update(str(obj.pk), _event_data(obj))
            service.update_notes(str(obj.pk), obj.notes)


@admin.register(Biography)
class BiographyAdmin(admin.ModelAdmin):
    list_display = ["variant", "updated_at"]

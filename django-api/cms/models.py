"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Composer(models.Model):
    """Persistence model for composers."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    full_name = models.CharField(max_length=255)
    short_name = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return self.full_name


class Piece(models.Model):
    """Persistence model for pieces."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    composer = models.ForeignKey(
        Composer, on_delete=models.PROTECT, related_name="pieces"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["composer"], name="idx_piece_composer"),
        ]

    def __str__(self) -> str:
        return self.title


class Programme(models.Model):
    """Persistence model for programmes."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return self.title


class ProgrammePiece(models.Model):
    """Join row placing a piece at a position within a programme.

    The same piece may appear more than once in a programme.
    """

    programme = models.ForeignKey(
        Programme, on_delete=models.CASCADE, related_name="programme_pieces"
    )
    piece = models.ForeignKey(
        Piece, on_delete=models.PROTECT, related_name="programme_pieces"
    )
    sequence = models.PositiveIntegerField()

    class Meta:
        ordering = ["programme", "sequence"]
        constraints = [
            models.UniqueConstraint(
                fields=["programme", "sequence"],
                name="unique_programme_sequence",
            ),
        ]
        indexes = [
            models.Index(fields=["piece"], name="idx_progpiece_piece"),
        ]

    def __str__(self) -> str:
        return f"{self.programme.title} #{self.sequence}"


class Venue(models.Model):
    """Persistence model for venues."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    full_address = models.CharField(max_length=500)
    short_address = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return self.name


class Event(models.Model):
    """Persistence model for events."""

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PUBLISHED = "published", "Published"
        ARCHIVED = "archived", "Archived"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    date = models.DateTimeField(blank=True, null=True)
    ticket_link = models.URLField(max_length=500, blank=True, null=True)
    venue = models.ForeignKey(
        Venue,
        on_delete=models.SET_NULL,
        related_name="events",
        blank=True,
        null=True,
    )
    programme = models.ForeignKey(
        Programme,
        on_delete=models.SET_NULL,
        related_name="events",
        blank=True,
        null=True,
    )
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.DRAFT
    )
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date", "-created_at"]
        indexes = [
            models.Index(fields=["status", "-date"], name="idx_event_status_date"),
            models.Index(fields=["programme", "status"], name="idx_event_programme_status"),
            models.Index(fields=["venue", "status"], name="idx_event_venue_status"),
        ]

    def __str__(self) -> str:
        return self.title


class Biography(models.Model):
    """Persistence model for the biography, one row per variant."""

    class Variant(models.TextChoices):
        FULL = "full", "Full"
        SHORT = "short", "Short"

    variant = models.CharField(max_length=8, choices=Variant.choices, primary_key=True)
    content = models.TextField(blank=True, default="")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "biographies"

    def __str__(self) -> str:
        return self.variant

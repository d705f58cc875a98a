"""Django signals for cache invalidation.

The generation is bumped once the surrounding transaction commits; a
rolled-back write never bumps it.

Content writes made through ``QuerySet.bulk_create`` send no ``post_save``,
so the store announces piece-set replacement with ``programme_pieces_replaced``.
"""

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import Signal, receiver

from cms import cache
from cms.models import Biography, Composer, Event, Piece, Programme, ProgrammePiece, Venue

programme_pieces_replaced = Signal()


@receiver([post_save, post_delete], sender=Event)
@receiver([post_save, post_delete], sender=Biography)
@receiver([post_save, post_delete], sender=Programme)
@receiver([post_save, post_delete], sender=ProgrammePiece)
@receiver([post_save, post_delete], sender=Piece)
@receiver([post_save, post_delete], sender=Composer)
@receiver([post_save, post_delete], sender=Venue)
def invalidate_content_cache(sender, instance, **kwargs):
    """Invalidate cached views when any content row is saved or deleted."""
    transaction.on_commit(cache.invalidate)


@receiver(programme_pieces_replaced)
def invalidate_programme_cache(sender, programme_id, **kwargs):
    """Invalidate cached views when a programme's pieces are replaced."""
    transaction.on_commit(cache.invalidate)

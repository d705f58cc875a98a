"""Programme service.

A programme referenced by at least one published event is frozen: neither
its metadata nor its piece set may change, and it cannot be deleted.
"""

import logging
from collections.abc import Sequence
from dataclasses import replace

from cms.domain import (
    PieceId,
    Programme,
    ProgrammeId,
    ProgrammeWithDetails,
    ProgrammeWithPieces,
)
from cms.domain.errors import ProgrammeImmutableError, ProgrammeProtectedError
from cms.services.common import parse_id, validate
from cms.services.guards import guard
from cms.stores.interfaces import ProgrammeStore, UnitOfWork

logger = logging.getLogger("cms.services.programme")


class ProgrammeService:
    """Service for programme operations."""

    def __init__(self, store: ProgrammeStore, uow: UnitOfWork) -> None:
        self._store = store
        self._uow = uow

    def get(self, programme_id: str) -> ProgrammeWithPieces:
        """Return a programme with its pieces in sequence order."""
        pid = parse_id(ProgrammeId, programme_id)
        logger.info("get programme", extra={"operation": "programme.get", "programme_id": str(pid)})
        with self._uow.atomic():
            programme = self._store.get(pid)
            pieces = self._store.list_pieces_in_order(pid)
        return ProgrammeWithPieces(programme=programme, pieces=pieces)

    def list_programmes(self) -> list[ProgrammeWithDetails]:
        logger.info("list programmes", extra={"operation": "programme.list"})
        return self._store.list_with_details()

    def create(self, programme: Programme) -> Programme:
        logger.info("create programme", extra={"operation": "programme.create"})
        validate(programme, "programme")
        return self._store.create(replace(programme, id=None))

    def update(self, programme_id: str, programme: Programme) -> Programme:
        """Update a programme's metadata.

        Pieces are not touched here, see :meth:`update_pieces`.

        Raises:
            ProgrammeImmutableError: If a published event references the programme.
        """
        pid = parse_id(ProgrammeId, programme_id)
        logger.info(
            "update programme",
            extra={"operation": "programme.update", "programme_id": str(pid)},
        )
        programme = replace(programme, id=pid)
        validate(programme, "programme")
        with self._uow.atomic():
            self._ensure_mutable(pid, "programme.update")
            return self._store.update(programme)

    def update_pieces(
        self, programme_id: str, piece_ids: Sequence[str]
    ) -> ProgrammeWithPieces:
        """Replace a programme's pieces with ``piece_ids``, in that order.

        Sequence numbers are always derived from list position (1-based).
        The same piece may appear more than once and takes one slot per
        occurrence.

        Raises:
            ProgrammeImmutableError: If a published event references the programme.
            ResourceNotFoundError: If the programme or any piece does not exist.
        """
        pid = parse_id(ProgrammeId, programme_id)
        ids = [parse_id(PieceId, piece_id) for piece_id in piece_ids]
        logger.info(
            "update programme pieces",
            extra={
                "operation": "programme.update_pieces",
                "programme_id": str(pid),
                "piece_count": len(ids),
            },
        )
        with self._uow.atomic():
            details = self._ensure_mutable(pid, "programme.update_pieces")
            pieces = self._store.replace_pieces(pid, ids)
        return ProgrammeWithPieces(programme=details.programme, pieces=pieces)

    def delete(self, programme_id: str) -> None:
        """Delete a programme and its piece rows.

        Raises:
            ProgrammeProtectedError: If a published event references the programme.
        """
        pid = parse_id(ProgrammeId, programme_id)
        logger.info(
            "delete programme",
            extra={"operation": "programme.delete", "programme_id": str(pid)},
        )
        with self._uow.atomic():
            details = self._store.get_with_details(pid, lock=True)
            guard(
                details.event_count,
                ProgrammeProtectedError(),
                operation="programme.delete",
                counted="event_count",
            )
            self._store.delete(pid)

    def _ensure_mutable(self, pid: ProgrammeId, operation: str) -> ProgrammeWithDetails:
        details = self._store.get_with_details(pid, lock=True)
        guard(
            details.event_count,
            ProgrammeImmutableError(),
            operation=operation,
            counted="event_count",
        )
        return details

"""Piece service.

Creating or updating a piece may also create, update or select the composer
it belongs to. Both writes share one unit of work.
"""

import logging
from dataclasses import replace

from cms.domain import Operation, Piece, PieceCommand, PieceId, PieceWithDetails
from cms.domain.errors import PieceProtectedError
from cms.services.common import parse_id, require_operation, validate
from cms.services.guards import guard
from cms.services.resolvers import ComposerResolver, PieceResolver
from cms.stores.interfaces import ComposerStore, PieceStore, UnitOfWork

logger = logging.getLogger("cms.services.piece")


class PieceService:
    """Service for piece operations."""

    def __init__(
        self,
        pieces: PieceStore,
        composers: ComposerStore,
        uow: UnitOfWork,
    ) -> None:
        self._pieces = pieces
        self._composers = composers
        self._uow = uow

    def get(self, piece_id: str) -> Piece:
        pid = parse_id(PieceId, piece_id)
        logger.info("get piece", extra={"operation": "piece.get", "piece_id": str(pid)})
        return self._pieces.get(pid)

    def list_pieces(self) -> list[PieceWithDetails]:
        logger.info("list pieces", extra={"operation": "piece.list"})
        return self._pieces.list_with_details()

    def create(self, command: PieceCommand) -> Piece:
        """Create a piece, resolving its composer first.

        Raises:
            OperationMismatchError: If the piece intent is not a CREATE.
            InvalidOperationError: If either intent's operation is unknown.
            InvalidResourceError: If the piece or composer payload is invalid.
        """
        logger.info("create piece", extra={"operation": "piece.create"})
        require_operation(command.piece, Operation.CREATE, "piece")
        return self._upsert(command)

    def update(self, command: PieceCommand) -> Piece:
        """Update a piece, resolving its composer first."""
        logger.info(
            "update piece",
            extra={"operation": "piece.update", "piece_id": str(command.piece.target_id)},
        )
        require_operation(command.piece, Operation.UPDATE, "piece")
        return self._upsert(command)

    def _upsert(self, command: PieceCommand) -> Piece:
        with self._uow.atomic():
            validate(command.piece.require_data(), "piece")
            composer = ComposerResolver(self._composers).resolve(command.composer)
            data = replace(command.piece.require_data(), composer_id=composer.id)
            intent = replace(command.piece, data=data)
            return PieceResolver(self._pieces).resolve(intent)

    def delete(self, piece_id: str) -> None:
        """Delete a piece.

        Raises:
            PieceProtectedError: If at least one programme includes the piece.
        """
        pid = parse_id(PieceId, piece_id)
        logger.info("delete piece", extra={"operation": "piece.delete", "piece_id": str(pid)})
        with self._uow.atomic():
            details = self._pieces.get_with_details(pid, lock=True)
            guard(
                details.programme_count,
                PieceProtectedError(),
                operation="piece.delete",
                counted="programme_count",
            )
            self._pieces.delete(pid)

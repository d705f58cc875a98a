"""Composer service."""

import logging

from cms.domain import Composer, ComposerCommand, ComposerId, ComposerWithDetails, Operation
from cms.domain.errors import ComposerProtectedError
from cms.services.common import parse_id, require_operation
from cms.services.guards import guard
from cms.services.resolvers import ComposerResolver
from cms.stores.interfaces import ComposerStore, UnitOfWork

logger = logging.getLogger("cms.services.composer")


class ComposerService:
    """Service for composer operations."""

    def __init__(self, store: ComposerStore, uow: UnitOfWork) -> None:
        self._store = store
        self._uow = uow

    def get(self, composer_id: str) -> Composer:
        """Return a composer by ID.

        Raises:
            InvalidIdError: If the composer_id is not a valid UUID.
            ResourceNotFoundError: If the composer does not exist.
        """
        cid = parse_id(ComposerId, composer_id)
        logger.info("get composer", extra={"operation": "composer.get", "composer_id": str(cid)})
        return self._store.get(cid)

    def list_composers(self) -> list[ComposerWithDetails]:
        """Return all composers with their piece counts."""
        logger.info("list composers", extra={"operation": "composer.list"})
        return self._store.list_with_details()

    def create(self, command: ComposerCommand) -> Composer:
        """Create the composer described by a CREATE intent."""
        logger.info("create composer", extra={"operation": "composer.create"})
        require_operation(command.composer, Operation.CREATE, "composer")
        return ComposerResolver(self._store).resolve(command.composer)

    def update(self, command: ComposerCommand) -> Composer:
        """Update the composer described by an UPDATE intent."""
        logger.info(
            "update composer",
            extra={"operation": "composer.update", "composer_id": str(command.composer.target_id)},
        )
        require_operation(command.composer, Operation.UPDATE, "composer")
        return ComposerResolver(self._store).resolve(command.composer)

    def delete(self, composer_id: str) -> None:
        """Delete a composer.

        Raises:
            ComposerProtectedError: If at least one piece belongs to the composer.
        """
        cid = parse_id(ComposerId, composer_id)
        logger.info("delete composer", extra={"operation": "composer.delete", "composer_id": str(cid)})
        with self._uow.atomic():
            details = self._store.get_with_details(cid, lock=True)
            guard(
                details.piece_count,
                ComposerProtectedError(),
                operation="composer.delete",
                counted="piece_count",
            )
            self._store.delete(cid)

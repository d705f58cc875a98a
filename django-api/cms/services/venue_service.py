"""Venue service."""

import logging

from cms.domain import Operation, Venue, VenueCommand, VenueId, VenueWithDetails
from cms.domain.errors import VenueProtectedError
from cms.services.common import parse_id, require_operation
from cms.services.guards import guard
from cms.services.resolvers import VenueResolver
from cms.stores.interfaces import UnitOfWork, VenueStore

logger = logging.getLogger("cms.services.venue")


class VenueService:
    """Service for venue operations."""

    def __init__(self, store: VenueStore, uow: UnitOfWork) -> None:
        self._store = store
        self._uow = uow

    def get(self, venue_id: str) -> Venue:
        vid = parse_id(VenueId, venue_id)
        logger.info("get venue", extra={"operation": "venue.get", "venue_id": str(vid)})
        return self._store.get(vid)

    def list_venues(self) -> list[VenueWithDetails]:
        logger.info("list venues", extra={"operation": "venue.list"})
        return self._store.list_with_details()

    def create(self, command: VenueCommand) -> Venue:
        logger.info("create venue", extra={"operation": "venue.create"})
        require_operation(command.venue, Operation.CREATE, "venue")
        return VenueResolver(self._store).resolve(command.venue)

    def update(self, command: VenueCommand) -> Venue:
        logger.info(
            "update venue",
            extra={"operation": "venue.update", "venue_id": str(command.venue.target_id)},
        )
        require_operation(command.venue, Operation.UPDATE, "venue")
        return VenueResolver(self._store).resolve(command.venue)

    def delete(self, venue_id: str) -> None:
        """Delete a venue.

        Venues hosting at least one published event are protected. Draft and
        archived events lose their venue reference instead.
        """
        vid = parse_id(VenueId, venue_id)
        logger.info("delete venue", extra={"operation": "venue.delete", "venue_id": str(vid)})
        with self._uow.atomic():
            details = self._store.get_with_details(vid, lock=True)
            guard(
                details.event_count,
                VenueProtectedError(),
                operation="venue.delete",
                counted="event_count",
            )
            self._store.delete(vid)

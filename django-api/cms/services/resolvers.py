"""Intent resolvers.

A resolver turns an :class:`~cms.domain.intents.Intent` into a persisted
resource by dispatching on its operation. Resolvers run inside the caller's
unit of work: if anything after resolution fails, the caller's rollback undoes
whatever the resolver wrote.
"""

import logging
from dataclasses import replace
from typing import Generic, TypeVar

from cms.domain import Composer, ComposerId, Intent, Operation, Piece, PieceId, Venue, VenueId
from cms.domain.errors import InvalidOperationError, MissingDataError
from cms.domain.value_objects import EntityId
from cms.services.common import parse_id, validate
from cms.stores.interfaces import ComposerStore, PieceStore, VenueStore

logger = logging.getLogger("cms.services.resolvers")

T = TypeVar("T", Composer, Piece, Venue)


class Resolver(Generic[T]):
    """Resolve intents for one kind of sub-resource against its store."""

    resource: str = ""
    id_type: type[EntityId] = EntityId

    def __init__(self, store) -> None:
        self._store = store

    def resolve(self, intent: Intent[T]) -> T:
        """Return the resource selected, created or updated by ``intent``.

        Raises:
            InvalidOperationError: If the operation is not SELECT, CREATE or UPDATE.
            InvalidResourceError: If a CREATE or UPDATE payload fails validation.
            MissingDataError: If the intent carries nothing to act on.
            ResourceNotFoundError: If a SELECT or UPDATE target does not exist.
        """
        handlers = {
            Operation.SELECT: self._select,
            Operation.CREATE: self._create,
            Operation.UPDATE: self._update,
        }
        return handlers[self._operation(intent)](intent)

    def _operation(self, intent: Intent[T]) -> Operation:
        try:
            return Operation.parse(intent.operation)
        except InvalidOperationError:
            self._reject(intent.operation)

    def _reject(self, operation: object):
        logger.warning(
            "invalid %s operation",
            self.resource,
            extra={"reason": "INVALID_OPERATION", "intent_operation": str(operation)},
        )
        raise InvalidOperationError(operation)

    def _target(self, intent: Intent[T]) -> EntityId:
        if intent.target_id is not None:
            return parse_id(self.id_type, intent.target_id)
        if intent.data is not None and intent.data.id is not None:
            return parse_id(self.id_type, intent.data.id)
        raise MissingDataError()

    def _validated(self, data: T) -> T:
        validate(data, self.resource)
        return data

    def _select(self, intent: Intent[T]) -> T:
        target = self._target(intent)
        logger.debug("select %s", self.resource, extra={"target_id": str(target)})
        return self._store.get(target)

    def _create(self, intent: Intent[T]) -> T:
        data = self._validated(intent.require_data())
        return self._store.create(replace(data, id=None))

    def _update(self, intent: Intent[T]) -> T:
        data = intent.require_data()
        data = self._validated(replace(data, id=self._target(intent)))
        return self._store.update(data)


class ComposerResolver(Resolver[Composer]):
    resource = "composer"
    id_type = ComposerId

    def __init__(self, store: ComposerStore) -> None:
        super().__init__(store)


class PieceResolver(Resolver[Piece]):
    resource = "piece"
    id_type = PieceId

    def __init__(self, store: PieceStore) -> None:
        super().__init__(store)


class VenueResolver(Resolver[Venue]):
    resource = "venue"
    id_type = VenueId

    def __init__(self, store: VenueStore) -> None:
        super().__init__(store)

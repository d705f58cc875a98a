"""Intents: how a referenced sub-resource should be resolved against storage.

An intent is request-scoped and never persisted. Parent commands embed one
per sub-resource so a caller can, for example, create a piece for a composer
that does not exist yet.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Self, TypeVar

from cms.domain.errors import InvalidOperationError, MissingDataError
from cms.domain.models import Composer, Piece, Venue
from cms.domain.value_objects import EntityId

T = TypeVar("T")


class Operation(str, Enum):
    """Closed set of intent operations."""

    SELECT = "SELECT"
    CREATE = "CREATE"
    UPDATE = "UPDATE"

    @classmethod
    def parse(cls, value: object) -> Self:
        """Return the operation named by ``value``.

        Raises:
            InvalidOperationError: For any value outside the closed set.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidOperationError(value) from None


@dataclass(frozen=True)
class Intent(Generic[T]):
    """Select an existing resource, or create one, or update one.

    ``operation`` is kept as given so that an unrecognised tag reaches the
    resolver and fails there instead of being dropped on the way in.
    """

    operation: Operation | str | None
    data: T | None = None
    target_id: EntityId | None = None

    def require_data(self) -> T:
        if self.data is None:
            raise MissingDataError()
        return self.data


@dataclass(frozen=True)
class ComposerCommand:
    """Create or update a composer. ``temp_id`` is echoed back on create."""

    composer: Intent[Composer]
    temp_id: str | None = None


@dataclass(frozen=True)
class VenueCommand:
    """Create or update a venue. ``temp_id`` is echoed back on create."""

    venue: Intent[Venue]
    temp_id: str | None = None


@dataclass(frozen=True)
class PieceCommand:
    """Create or update a piece together with the composer it belongs to."""

    piece: Intent[Piece]
    composer: Intent[Composer]
    temp_id: str | None = None

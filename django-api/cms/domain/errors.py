"""Domain error codes for the cms module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_ID = "INVALID_ID"
    INVALID_RESOURCE = "INVALID_RESOURCE"
    INVALID_OPERATION = "INVALID_OPERATION"
    OPERATION_MISMATCH = "OPERATION_MISMATCH"
    MISSING_DATA = "MISSING_DATA"
    INVALID_FILTER = "INVALID_FILTER"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    INVARIANT_VIOLATION = "INVARIANT_VIOLATION"
    COMPOSER_PROTECTED = "COMPOSER_PROTECTED"
    PIECE_PROTECTED = "PIECE_PROTECTED"
    VENUE_PROTECTED = "VENUE_PROTECTED"
    PROGRAMME_PROTECTED = "PROGRAMME_PROTECTED"
    EVENT_PROTECTED = "EVENT_PROTECTED"
    PROGRAMME_IMMUTABLE = "PROGRAMME_IMMUTABLE"
    EVENT_IMMUTABLE = "EVENT_IMMUTABLE"
    EVENT_NOT_PUBLISHABLE = "EVENT_NOT_PUBLISHABLE"
    PROGRAMME_HAS_NO_PIECES = "PROGRAMME_HAS_NO_PIECES"
    INVALID_BIOGRAPHY_VARIANT = "INVALID_BIOGRAPHY_VARIANT"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code, user-safe message and optional detail."""

    code: ErrorCode
    message: str
    detail: str | None = None

    def __str__(self) -> str:
        if self.detail:
            return f"{self.code.value}: {self.message}: {self.detail}"
        return f"{self.code.value}: {self.message}"


class FieldError(ValueError):
    """A single violated validation rule.

    Raised by the pure ``validate`` checks on domain models. Services wrap it
    in :class:`InvalidResourceError` or :class:`EventNotPublishableError`.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class InvalidIdError(DomainError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, value: str = "") -> None:
        super().__init__(
            code=ErrorCode.INVALID_ID,
            message="Invalid id format",
            detail=value or None,
        )


class InvalidResourceError(DomainError):
    """Raised when a payload fails its validation rules."""

    def __init__(self, reason: Exception | str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RESOURCE,
            message="Invalid resource",
            detail=str(reason),
        )


class InvalidOperationError(DomainError):
    """Raised when an intent carries an unsupported operation tag."""

    def __init__(self, operation: object = None) -> None:
        super().__init__(
            code=ErrorCode.INVALID_OPERATION,
            message="Invalid operation",
            detail=None if operation is None else str(operation),
        )


class OperationMismatchError(DomainError):
    """Raised when an intent's operation does not match the endpoint."""

    def __init__(self, expected: str, got: object) -> None:
        super().__init__(
            code=ErrorCode.OPERATION_MISMATCH,
            message="Operation mismatch",
            detail=f"expected {expected}, got {got}",
        )


class MissingDataError(DomainError):
    """Raised when an intent carries no payload."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.MISSING_DATA,
            message="Missing data",
        )


class InvalidFilterError(DomainError):
    """Raised when a list filter holds an unknown value."""

    def __init__(self, name: str, value: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_FILTER,
            message="Invalid filter",
            detail=f"{name}={value}",
        )


class ResourceNotFoundError(DomainError):
    """Raised when a lookup by id finds no row."""

    def __init__(self, resource: str) -> None:
        super().__init__(
            code=ErrorCode.RESOURCE_NOT_FOUND,
            message=f"{resource.capitalize()} not found",
        )


class InvariantViolationError(DomainError):
    """Raised when a store write touched an unexpected number of rows."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.INVARIANT_VIOLATION,
            message="Invariant violation",
            detail=detail,
        )


class ComposerProtectedError(DomainError):
    """Raised when deleting a composer that still has pieces."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.COMPOSER_PROTECTED,
            message="Composer protected; deletion forbidden",
        )


class PieceProtectedError(DomainError):
    """Raised when deleting a piece that is part of a programme."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PIECE_PROTECTED,
            message="Piece protected; deletion forbidden",
        )


class VenueProtectedError(DomainError):
    """Raised when deleting a venue referenced by a published event."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.VENUE_PROTECTED,
            message="Venue protected; deletion forbidden",
        )


class ProgrammeProtectedError(DomainError):
    """Raised when deleting a programme referenced by a published event."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PROGRAMME_PROTECTED,
            message="Programme protected; deletion forbidden",
        )


class EventProtectedError(DomainError):
    """Raised when deleting a published event."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_PROTECTED,
            message="Event protected; deletion forbidden",
        )


class ProgrammeImmutableError(DomainError):
    """Raised when editing a programme referenced by a published event."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PROGRAMME_IMMUTABLE,
            message="Programme is immutable",
        )


class EventImmutableError(DomainError):
    """Raised when editing an event that is not a draft."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_IMMUTABLE,
            message="Event is immutable",
        )


class EventNotPublishableError(DomainError):
    """Raised when publishing an incomplete event."""

    def __init__(self, reason: FieldError) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_PUBLISHABLE,
            message="Event not publishable",
            detail=str(reason),
        )


class ProgrammeHasNoPiecesError(DomainError):
    """Raised when publishing an event whose programme is empty."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PROGRAMME_HAS_NO_PIECES,
            message="Programme has no pieces",
        )


class InvalidBiographyVariantError(DomainError):
    """Raised when a biography variant is neither full nor short."""

    def __init__(self, variant: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_BIOGRAPHY_VARIANT,
            message="Invalid biography variant",
            detail=variant,
        )

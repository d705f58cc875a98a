"""Helpers shared by the cms services."""

import logging
from typing import TypeVar
from uuid import UUID

from cms.domain.errors import (
    FieldError,
    InvalidIdError,
    InvalidOperationError,
    InvalidResourceError,
    OperationMismatchError,
)
from cms.domain.intents import Intent, Operation
from cms.domain.value_objects import EntityId

logger = logging.getLogger("cms.services")

IdT = TypeVar("IdT", bound=EntityId)


def parse_id(id_type: type[IdT], value: str | UUID | EntityId) -> IdT:
    """Return ``value`` as an ``id_type``.

    Raises:
        InvalidIdError: If ``value`` is not a valid UUID.
    """
    if isinstance(value, id_type):
        return value
    if isinstance(value, EntityId):
        return id_type(value=value.value)
    if isinstance(value, UUID):
        return id_type(value=value)
    try:
        return id_type.from_string(value)
    except (AttributeError, TypeError, ValueError):
        raise InvalidIdError(str(value)) from None


def validate(entity, resource: str) -> None:
    """Run ``entity``'s validation rules.

    Raises:
        InvalidResourceError: Wrapping the first violated rule.
    """
    try:
        entity.validate()
    except FieldError as err:
        logger.warning(
            "validate %s rejected",
            resource,
            extra={"reason": str(err), "field": err.field},
        )
        raise InvalidResourceError(err) from err


def require_operation(intent: Intent, expected: Operation, resource: str) -> None:
    """Check that a top-level intent matches the endpoint it was sent to.

    Raises:
        InvalidOperationError: If the intent's operation is unknown.
        OperationMismatchError: If it is known but not ``expected``.
    """
    try:
        operation = Operation.parse(intent.operation)
    except InvalidOperationError:
        logger.warning(
            "invalid %s operation",
            resource,
            extra={"reason": "INVALID_OPERATION", "intent_operation": str(intent.operation)},
        )
        raise
    if operation is not expected:
        logger.warning(
            "%s operation mismatch",
            resource,
            extra={"reason": "OPERATION_MISMATCH", "intent_operation": operation.value},
        )
        raise OperationMismatchError(expected.value, operation.value)

"""Protection guard.

Turns a positive dependent-row count into a named domain error before a
delete (or, for programmes, an edit) reaches the database. Callers read the
count with ``get_with_details(..., lock=True)`` inside the same unit of work
as the write, so no dependent row can appear between the check and the act.
"""

import logging

from cms.domain.errors import DomainError

logger = logging.getLogger("cms.services.guards")


def guard(count: int, error: DomainError, *, operation: str, counted: str) -> None:
    """Raise ``error`` when ``count`` dependent rows exist."""
    if count > 0:
        logger.warning(
            "%s blocked",
            operation,
            extra={"operation": operation, "reason": error.code.value, counted: count},
        )
        raise error

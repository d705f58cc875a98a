"""Biography service."""

import logging

from cms.domain import Biography, BiographyVariant
from cms.domain.errors import FieldError, InvalidBiographyVariantError
from cms.domain.models import validate_variant
from cms.stores.interfaces import BiographyStore

logger = logging.getLogger("cms.services.biography")


def _variant(value: BiographyVariant | str) -> BiographyVariant:
    try:
        return validate_variant(value)
    except FieldError:
        logger.warning(
            "invalid biography variant",
            extra={"reason": "INVALID_BIOGRAPHY_VARIANT", "variant": str(value)},
        )
        raise InvalidBiographyVariantError(str(value)) from None


class BiographyService:
    """Service for biography operations."""

    def __init__(self, store: BiographyStore) -> None:
        self._store = store

    def get(self, variant: BiographyVariant | str) -> Biography:
        """Return the biography stored for ``variant``.

        Raises:
            InvalidBiographyVariantError: If the variant is neither full nor short.
            ResourceNotFoundError: If no biography exists for the variant yet.
        """
        variant = _variant(variant)
        logger.info("get biography", extra={"operation": "biography.get", "variant": variant.value})
        return self._store.get(variant)

    def update(self, variant: BiographyVariant | str, content: str) -> Biography:
        """Write the biography for ``variant``, creating it on first use."""
        variant = _variant(variant)
        logger.info(
            "update biography",
            extra={"operation": "biography.update", "variant": variant.value},
        )
        return self._store.upsert(Biography(content=content, variant=variant))

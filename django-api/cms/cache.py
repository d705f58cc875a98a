"""Cache keys for public read views.

Every key embeds the current content generation. Any content write bumps the
generation, which orphans all previously cached views at once; orphaned
entries expire on their own timeout.
"""

from django.conf import settings
from django.core.cache import cache

GENERATION_KEY = "cms:generation"


def generation() -> int:
    return cache.get_or_set(GENERATION_KEY, 1, timeout=None)


def versioned_key(*parts: object) -> str:
    return ":".join(["cms", f"g{generation()}", *(str(p) for p in parts)])


def invalidate() -> None:
    try:
        cache.incr(GENERATION_KEY)
    except ValueError:
        cache.set(GENERATION_KEY, 2, timeout=None)


def timeout() -> int:
    return getattr(settings, "CMS_CACHE_TIMEOUT", 300)

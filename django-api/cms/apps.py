"""CMS app configuration.

This app:
- Owns composers, pieces, programmes, venues, events and the biography
- Resolves sub-resource intents and enforces cross-entity protection
- Drives the event lifecycle (draft, published, archived)

This app does NOT:
- Authenticate callers (supplied by middleware in front of it)
- Paginate list responses
"""

from django.apps import AppConfig


class CmsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "cms"
    label = "cms"
    verbose_name = "Content Management"

    def ready(self) -> None:
        from cms import signals  # noqa: F401

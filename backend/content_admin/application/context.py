"""Process-wide application context, built once in the FastAPI lifespan."""

from dataclasses import dataclass

from content_admin.application.services.audit_writer import AuditWriter
from content_admin.application.services.field_translator import FieldNameTranslator
from content_admin.application.services.resource_registry import ResourceRegistry
from content_admin.config import Settings


@dataclass(frozen=True)
class AppContext:
    """Shared, read-only collaborators handed to request-scoped services."""

    settings: Settings
    registry: ResourceRegistry
    translator: FieldNameTranslator
    audit_writer: AuditWriter

from .field_translator import Direction, FieldNameTranslator
from .resource_registry import ResourceRegistry
from .resource_catalog import build_default_registry
from .query_builder import QueryBuilder
from .lifecycle_manager import LifecycleManager, validate_id_list
from .audit_writer import AuditWriter
from .audit_interceptor import AuditInterceptor
from .audit_log_store import AuditLogStore
from .resource_service import ResourceService

__all__ = [
    "Direction",
    "FieldNameTranslator",
    "ResourceRegistry",
    "build_default_registry",
    "QueryBuilder",
    "LifecycleManager",
    "validate_id_list",
    "AuditWriter",
    "AuditInterceptor",
    "AuditLogStore",
    "ResourceService",
]

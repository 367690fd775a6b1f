from .entity_repository import EntityRepository
from .audit_log_repository import AuditLogRepository

__all__ = [
    "EntityRepository",
    "AuditLogRepository",
]

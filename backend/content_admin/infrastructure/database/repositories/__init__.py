from .entity_repository import SQLAlchemyEntityRepository
from .audit_log_repository import SQLAlchemyAuditLogRepository

__all__ = [
    "SQLAlchemyEntityRepository",
    "SQLAlchemyAuditLogRepository",
]

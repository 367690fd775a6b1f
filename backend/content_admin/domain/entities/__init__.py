from .resource_descriptor import ResourceDescriptor, Status, camel_to_snake
from .audit_log_entry import AuditLogEntry, OperationType
from .query import (
    AnyOf,
    BulkResult,
    Condition,
    Criterion,
    ListRequest,
    MAX_ENTITY_ID,
    Operator,
    PageResult,
    SortKey,
)

__all__ = [
    "ResourceDescriptor",
    "Status",
    "camel_to_snake",
    "AuditLogEntry",
    "OperationType",
    "AnyOf",
    "BulkResult",
    "Condition",
    "Criterion",
    "ListRequest",
    "MAX_ENTITY_ID",
    "Operator",
    "PageResult",
    "SortKey",
]

"""Domain entity — an immutable record of one audited mutating operation."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class OperationType(str, Enum):
    ADD = "ADD"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ENABLE = "ENABLE"
    DISABLE = "DISABLE"

    @classmethod
    def for_save(cls, entity_id: Any) -> "OperationType":
        """A save with an id is an update, otherwise a creation."""
        return cls.UPDATE if entity_id else cls.ADD


@dataclass(frozen=True)
class AuditLogEntry:
    """Before/after snapshot of a single entity touched by an operation.

    Snapshots are in the wire convention. ``data_before`` is ``None`` for
    ADD; ``data_after`` is ``None`` for a single DELETE and a
    ``{"operation", "count"}`` summary for bulk transitions.
    """

    biz_type: str
    operation_type: OperationType
    data_id: int | None
    data_info: str
    operation_user: str
    data_before: dict[str, Any] | None = None
    data_after: dict[str, Any] | None = None
    operation_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: int | None = None

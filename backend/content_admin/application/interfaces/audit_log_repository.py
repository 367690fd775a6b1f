"""Abstract repository interface (port) for AuditLogEntry persistence."""

from abc import ABC, abstractmethod

from content_admin.domain.entities import AuditLogEntry


class AuditLogRepository(ABC):
    """Append-only port. Entries are never updated or deleted."""

    @abstractmethod
    async def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Persist a new entry and return it with its id assigned."""
        ...

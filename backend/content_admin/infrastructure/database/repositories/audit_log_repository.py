"""Concrete repository implementation for AuditLogEntry backed by SQLAlchemy."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from content_admin.application.interfaces import AuditLogRepository
from content_admin.domain.entities import AuditLogEntry, OperationType
from content_admin.domain.exceptions import AuditWriteError
from content_admin.infrastructure.database.models import OpLogModel


class SQLAlchemyAuditLogRepository(AuditLogRepository):
    """Implements the AuditLogRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: OpLogModel) -> AuditLogEntry:
        """Map ORM model → domain entity."""
        return AuditLogEntry(
            id=model.id,
            biz_type=model.biz_type,
            operation_type=OperationType(model.operation_type),
            data_id=model.data_id,
            data_info=model.data_info or "",
            data_before=model.data_before,
            data_after=model.data_after,
            operation_user=model.operation_user,
            operation_time=model.operation_time,
        )

    def _to_model(self, entity: AuditLogEntry) -> OpLogModel:
        """Map domain entity → ORM model (for creation)."""
        return OpLogModel(
            biz_type=entity.biz_type,
            operation_type=entity.operation_type.value,
            data_id=entity.data_id,
            data_info=(entity.data_info or "")[:255],
            data_before=entity.data_before,
            data_after=entity.data_after,
            operation_user=entity.operation_user,
            operation_time=entity.operation_time,
        )

    async def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        model = self._to_model(entry)
        try:
            self._session.add(model)
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise AuditWriteError(entry.biz_type, entry.data_id, str(exc)) from exc
        return self._to_entity(model)

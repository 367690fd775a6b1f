"""SQLAlchemy ORM model for the append-only audit log."""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from content_admin.infrastructure.database.base import Base


class OpLogModel(Base):
    """ORM model — maps to the 'op_logs' table."""

    __tablename__ = "op_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    biz_type: Mapped[str] = mapped_column(String(100), nullable=False)
    operation_type: Mapped[str] = mapped_column(String(20), nullable=False)
    data_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    data_info: Mapped[str | None] = mapped_column(String(255), nullable=True)
    data_before: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    data_after: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    operation_user: Mapped[str] = mapped_column(String(255), nullable=False)
    operation_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_op_logs_biz", "biz_type", "data_id"),
        Index("ix_op_logs_operation_time", "operation_time"),
        Index("ix_op_logs_operation_user", "operation_user"),
    )

    def __repr__(self) -> str:
        return (
            f"<OpLogModel(id={self.id}, biz='{self.biz_type}', "
            f"op={self.operation_type}, data_id={self.data_id})>"
        )

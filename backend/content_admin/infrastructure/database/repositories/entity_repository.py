"""Concrete table-generic repository backed by SQLAlchemy Core."""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, Table, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from content_admin.application.interfaces import EntityRepository
from content_admin.domain.entities import AnyOf, Condition, Criterion, Operator, SortKey
from content_admin.infrastructure.database.base import Base


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLAlchemyEntityRepository(EntityRepository):
    """Implements the EntityRepository port over every table in ``Base.metadata``."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _table(self, name: str) -> Table:
        try:
            return Base.metadata.tables[name]
        except KeyError:
            raise ValueError(f"Table '{name}' is not mapped") from None

    def _column(self, table: Table, name: str):
        try:
            return table.c[name]
        except KeyError:
            raise ValueError(f"Column '{name}' does not exist on '{table.name}'") from None

    def _clause(self, table: Table, criterion: Criterion) -> ColumnElement[bool]:
        if isinstance(criterion, AnyOf):
            return or_(*(self._clause(table, c) for c in criterion.conditions))

        column = self._column(table, criterion.column)
        if criterion.operator is Operator.EQ:
            return column == criterion.value
        if criterion.operator is Operator.IN:
            return column.in_(list(criterion.value))
        if criterion.operator is Operator.CONTAINS:
            return column.ilike(f"%{_escape_like(str(criterion.value))}%", escape="\\")
        raise ValueError(f"Unsupported operator {criterion.operator!r}")

    def _where(self, table: Table, where: Sequence[Criterion]) -> list[ColumnElement[bool]]:
        return [self._clause(table, criterion) for criterion in where]

    def columns(self, table: str) -> frozenset[str]:
        return frozenset(self._table(table).c.keys())

    async def find(
        self,
        table: str,
        *,
        where: Sequence[Criterion] = (),
        order_by: Sequence[SortKey] = (),
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        t = self._table(table)
        stmt = select(t).where(*self._where(t, where))
        for key in order_by:
            column = self._column(t, key.column)
            stmt = stmt.order_by(column.desc() if key.descending else column.asc())
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self._session.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def count(self, table: str, *, where: Sequence[Criterion] = ()) -> int:
        t = self._table(table)
        stmt = select(func.count()).select_from(t).where(*self._where(t, where))
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def insert(self, table: str, values: dict[str, Any]) -> int:
        t = self._table(table)
        result = await self._session.execute(insert(t).values(**values))
        return int(result.inserted_primary_key[0])

    async def update(
        self, table: str, values: dict[str, Any], *, where: Sequence[Criterion]
    ) -> int:
        t = self._table(table)
        stmt = update(t).where(*self._where(t, where)).values(**values)
        result = await self._session.execute(stmt)
        return result.rowcount

"""Audit Log Store — append-only audit trail with its own listing surface."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Any

from content_admin.application.interfaces import AuditLogRepository
from content_admin.application.services.query_builder import QueryBuilder
from content_admin.application.services.resource_catalog import OP_LOGS
from content_admin.application.services.resource_registry import ResourceRegistry
from content_admin.domain.entities import (
    AuditLogEntry,
    ListRequest,
    MAX_ENTITY_ID,
    PageResult,
)

logger = logging.getLogger(__name__)

_USER_RESOURCE = "user"
_BIZ_TYPE_FILTERS = ("bizType", "bizTypeList")
_USER_ID = re.compile(r"^\d+$", re.ASCII)


class AuditLogStore:
    """Appends entries and lists them through the generic Query Builder.

    Listings resolve a numeric ``operationUser`` to that user's email so the
    dashboard can show who acted; unknown users render as ``ID:<id>``.
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        repository: AuditLogRepository,
        query_builder: QueryBuilder,
    ):
        self._registry = registry
        self._repository = repository
        self._query_builder = query_builder

    async def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        saved = await self._repository.append(entry)
        logger.info(
            "Audit %s %s#%s by %s",
            saved.operation_type.value,
            saved.biz_type,
            saved.data_id,
            saved.operation_user,
        )
        return saved

    async def list(self, request: ListRequest) -> PageResult:
        filters = dict(request.filters)
        for name in _BIZ_TYPE_FILTERS:
            if name in filters:
                filters[name] = _normalize_biz_type(filters[name])

        page = await self._query_builder.list(OP_LOGS, replace(request, filters=filters))
        page.rows = await self._resolve_operators(page.rows)
        return page

    async def detail(self, entry_id: int) -> dict[str, Any]:
        row = await self._query_builder.detail(OP_LOGS, entry_id)
        return (await self._resolve_operators([row]))[0]

    async def _resolve_operators(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        user_ids = {
            user_id
            for row in rows
            if (user_id := _user_id(row.get("operationUser"))) is not None
        }
        if not user_ids:
            return rows

        users = await self._query_builder.fetch_rows(
            self._registry.describe(_USER_RESOURCE), sorted(user_ids)
        )
        emails = {user["id"]: user.get("email") for user in users}
        for row in rows:
            user_id = _user_id(row.get("operationUser"))
            if user_id is not None:
                row["operationUser"] = emails.get(user_id) or f"ID:{user_id}"
        return rows


def _normalize_biz_type(value: Any) -> Any:
    if isinstance(value, str):
        return value.replace("-", "_")
    if isinstance(value, (list, tuple)):
        return [_normalize_biz_type(item) for item in value]
    return value


def _user_id(operator: Any) -> int | None:
    """The user id an operator string names, or None for any other operator."""
    if not isinstance(operator, str) or not _USER_ID.match(operator):
        return None
    user_id = int(operator)
    return user_id if 0 < user_id <= MAX_ENTITY_ID else None

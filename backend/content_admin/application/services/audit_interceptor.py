"""Audit Interceptor — wraps mutating operations with before/after snapshots."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from pydantic import TypeAdapter

from content_admin.application.services.audit_writer import AuditWriter
from content_admin.application.services.query_builder import QueryBuilder
from content_admin.application.services.resource_registry import ResourceRegistry
from content_admin.application.wire_format import format_wire
from content_admin.domain.entities import (
    AuditLogEntry,
    BulkResult,
    OperationType,
    ResourceDescriptor,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_JSON = TypeAdapter(Any)
_LABEL_FIELDS = ("name", "title", "display_name", "username", "email")


class AuditInterceptor:
    """Records one audit entry per entity touched by a successful operation.

    Usage:
        new_id = await interceptor.intercept(
            "sound", OperationType.ADD, None, lambda: service.create(...), user,
        )

    ``perform`` returns the new id for ADD, a BulkResult for bulk
    transitions, and anything for a single-entity UPDATE/DELETE. Snapshot
    reads that fail only degrade the entry; a failing ``perform`` propagates
    and nothing is recorded.
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        query_builder: QueryBuilder,
        writer: AuditWriter,
    ):
        self._registry = registry
        self._query_builder = query_builder
        self._writer = writer

    async def intercept(
        self,
        resource_key: str,
        operation_type: OperationType,
        ids: int | list[int] | None,
        perform: Callable[[], Awaitable[T]],
        operation_user: str,
    ) -> T:
        descriptor = self._registry.describe(resource_key)
        requested = _as_id_list(ids)

        before: dict[int, dict[str, Any]] | None = {}
        if operation_type is not OperationType.ADD and requested:
            before = await self._snapshot(descriptor, requested)

        result = await perform()

        if operation_type is OperationType.ADD:
            targets = _as_id_list(result if not isinstance(result, dict) else result.get("id"))
        elif before is None:
            targets = requested
        else:
            targets = [entity_id for entity_id in requested if entity_id in before]

        after: dict[int, dict[str, Any]] | None = {}
        if not isinstance(result, BulkResult) and operation_type is not OperationType.DELETE:
            after = await self._snapshot(descriptor, targets)

        for entity_id in targets:
            row_before = (before or {}).get(entity_id)
            row_after = (after or {}).get(entity_id)
            try:
                entry = self._build_entry(
                    descriptor, operation_type, entity_id, row_before, row_after, result,
                    operation_user,
                )
            except Exception:
                logger.exception(
                    "Could not build audit entry for %s#%s", descriptor.biz_type, entity_id
                )
                continue
            self._writer.enqueue(entry)

        return result

    def _build_entry(
        self,
        descriptor: ResourceDescriptor,
        operation_type: OperationType,
        entity_id: int,
        row_before: dict[str, Any] | None,
        row_after: dict[str, Any] | None,
        result: Any,
        operation_user: str,
    ) -> AuditLogEntry:
        if isinstance(result, BulkResult):
            data_after = result.summary()
        elif row_after is not None:
            data_after = self._wire(descriptor, row_after)
        else:
            data_after = None

        return AuditLogEntry(
            biz_type=descriptor.biz_type,
            operation_type=operation_type,
            data_id=entity_id,
            data_info=describe_entity(descriptor, row_after or row_before, entity_id),
            operation_user=operation_user,
            data_before=self._wire(descriptor, row_before) if row_before else None,
            data_after=data_after,
        )

    async def _snapshot(
        self, descriptor: ResourceDescriptor, ids: list[int]
    ) -> dict[int, dict[str, Any]] | None:
        """Storage rows keyed by id, or None when the read fails."""
        if not ids:
            return {}
        try:
            rows = await self._query_builder.fetch_rows(descriptor, ids)
        except Exception:
            logger.warning(
                "Snapshot read failed for %s %s; audit entry will lack state",
                descriptor.resource_key,
                ids,
                exc_info=True,
            )
            return None
        return {row[descriptor.id_field]: row for row in rows}

    def _wire(self, descriptor: ResourceDescriptor, row: dict[str, Any]) -> dict[str, Any]:
        wire = format_wire(self._query_builder.to_wire(descriptor, row))
        return _JSON.dump_python(wire, mode="json")


def describe_entity(
    descriptor: ResourceDescriptor, row: dict[str, Any] | None, entity_id: int | None
) -> str:
    """Human-readable label of an entity for the audit trail."""
    if row:
        for field_name in (descriptor.search_text_field, *_LABEL_FIELDS):
            value = row.get(field_name)
            if value not in (None, ""):
                return str(value)
    if entity_id is not None:
        return f"ID:{entity_id}"
    return "Unknown"


def _as_id_list(ids: Any) -> list[int]:
    if ids is None:
        return []
    if isinstance(ids, (list, tuple)):
        return [i for i in ids if isinstance(i, int) and not isinstance(i, bool)]
    if isinstance(ids, int) and not isinstance(ids, bool):
        return [ids]
    return []

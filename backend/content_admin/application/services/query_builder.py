"""Query Builder — turns a listing request into a read against the repository.

Keyword search resolves in two stages. A keyword made only of digits is
first tried as an exact id; when a live row has that id it is the only
result and all other filters are dropped. Otherwise the keyword is matched
case-insensitively as a substring of the descriptor's search fields.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from content_admin.application.interfaces import EntityRepository
from content_admin.application.services.field_translator import FieldNameTranslator
from content_admin.application.services.resource_registry import ResourceRegistry
from content_admin.domain.entities import (
    AnyOf,
    Condition,
    Criterion,
    ListRequest,
    MAX_ENTITY_ID,
    Operator,
    PageResult,
    ResourceDescriptor,
    SortKey,
)
from content_admin.domain.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_ID_KEYWORD = re.compile(r"^\d+$", re.ASCII)
_LIST_SUFFIX = "List"


class QueryBuilder:
    """Paginated, filterable, keyword-searchable listings for any resource."""

    def __init__(
        self,
        registry: ResourceRegistry,
        repository: EntityRepository,
        translator: FieldNameTranslator,
        *,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ):
        self._registry = registry
        self._repository = repository
        self._translator = translator
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    async def list(
        self, resource_key: str, request: ListRequest
    ) -> PageResult | list[dict[str, Any]]:
        """List wire records of a resource.

        Returns a PageResult for paginated resources and a flat, fully
        ordered list for resources that are never paginated.
        """
        descriptor = self._registry.describe(resource_key)
        where = await self._build_where(descriptor, request)
        order_by = self._build_order(descriptor, request)

        if not descriptor.paginated:
            rows = await self._repository.find(descriptor.table, where=where, order_by=order_by)
            return [self.to_wire(descriptor, row) for row in rows]

        page_size = _as_int(request.page_size, self._default_page_size)
        page_size = min(max(1, page_size), self._max_page_size)
        page_index = min(max(1, _as_int(request.page_index, 1)), MAX_ENTITY_ID // page_size)

        total = await self._repository.count(descriptor.table, where=where)
        rows = await self._repository.find(
            descriptor.table,
            where=where,
            order_by=order_by,
            offset=(page_index - 1) * page_size,
            limit=page_size,
        )
        return PageResult(
            rows=[self.to_wire(descriptor, row) for row in rows],
            total=total,
            page_index=page_index,
            page_size=page_size,
        )

    async def detail(self, resource_key: str, entity_id: int) -> dict[str, Any]:
        """Return one live wire record, or raise NotFoundError."""
        descriptor = self._registry.describe(resource_key)
        rows = await self.fetch_rows(descriptor, [entity_id])
        if not rows:
            raise NotFoundError(resource_key, entity_id)
        return self.to_wire(descriptor, rows[0])

    async def fetch_rows(
        self, descriptor: ResourceDescriptor, ids: list[int]
    ) -> list[dict[str, Any]]:
        """Live storage rows for the given ids, ordered by id."""
        ids = [entity_id for entity_id in ids if 0 < entity_id <= MAX_ENTITY_ID]
        if not ids:
            return []
        where = [*live_criteria(descriptor), Condition(descriptor.id_field, Operator.IN, ids)]
        return await self._repository.find(
            descriptor.table,
            where=where,
            order_by=[SortKey(descriptor.id_field)],
        )

    def to_wire(self, descriptor: ResourceDescriptor, row: dict[str, Any]) -> dict[str, Any]:
        """Translate a storage row for the boundary, hiding the soft-delete flag."""
        visible = {k: v for k, v in row.items() if k != descriptor.soft_delete_field}
        return self._translator.to_wire(visible)

    async def _build_where(
        self, descriptor: ResourceDescriptor, request: ListRequest
    ) -> list[Criterion]:
        live = live_criteria(descriptor)
        keywords = (request.keywords or "").strip()

        if (
            keywords
            and descriptor.smart_search
            and _ID_KEYWORD.match(keywords)
            and int(keywords) <= MAX_ENTITY_ID
        ):
            by_id = [*live, Condition(descriptor.id_field, Operator.EQ, int(keywords))]
            if await self._repository.count(descriptor.table, where=by_id) > 0:
                return by_id

        where = [*live, *self._filter_criteria(descriptor, request.filters)]
        if keywords:
            where.append(
                AnyOf(
                    tuple(
                        Condition(field, Operator.CONTAINS, keywords)
                        for field in descriptor.search_fields
                    )
                )
            )
        return where

    def _filter_criteria(
        self, descriptor: ResourceDescriptor, filters: dict[str, Any]
    ) -> list[Condition]:
        criteria: list[Condition] = []
        for wire_name, raw in filters.items():
            name = wire_name
            if name.endswith(_LIST_SUFFIX) and len(name) > len(_LIST_SUFFIX):
                name = name[: -len(_LIST_SUFFIX)]
            column = self._translator.storage_key(name)
            value_type = descriptor.filterable_fields.get(column)
            if value_type is None:
                logger.debug("Ignoring unknown filter '%s' on %s", wire_name, descriptor.resource_key)
                continue

            values = _split_values(raw)
            if not values:
                continue
            coerced = [_coerce(wire_name, value, value_type) for value in values]
            if isinstance(raw, (list, tuple)) or len(coerced) > 1:
                criteria.append(Condition(column, Operator.IN, coerced))
            else:
                criteria.append(Condition(column, Operator.EQ, coerced[0]))
        return criteria

    def _build_order(
        self, descriptor: ResourceDescriptor, request: ListRequest
    ) -> list[SortKey]:
        if descriptor.fixed_sort_field:
            return [SortKey(descriptor.fixed_sort_field), SortKey(descriptor.id_field)]

        descending = (request.order_direction or "desc").strip().lower() != "asc"
        column = descriptor.order_field
        if request.order_by:
            requested = self._translator.storage_key(request.order_by.strip())
            if requested in self._repository.columns(descriptor.table):
                column = requested
            else:
                logger.debug(
                    "Ignoring unknown orderBy '%s' on %s", request.order_by, descriptor.resource_key
                )

        keys = [SortKey(column, descending)]
        if column != descriptor.id_field:
            keys.append(SortKey(descriptor.id_field, descending))
        return keys


def live_criteria(descriptor: ResourceDescriptor) -> list[Criterion]:
    """Criteria excluding soft-deleted rows, empty when the resource has no flag."""
    if descriptor.soft_delete_field is None:
        return []
    return [Condition(descriptor.soft_delete_field, Operator.EQ, 0)]


def _split_values(raw: Any) -> list[Any]:
    if raw is None:
        return []
    items = raw if isinstance(raw, (list, tuple)) else [raw]
    values: list[Any] = []
    for item in items:
        if isinstance(item, str):
            values.extend(part.strip() for part in item.split(",") if part.strip())
        elif item is not None:
            values.append(item)
    return values


def _coerce(name: str, value: Any, value_type: type) -> Any:
    try:
        if not isinstance(value, value_type) or isinstance(value, bool):
            value = value_type(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Invalid value for filter '{name}'",
            errors=[{"field": name, "message": f"expected {value_type.__name__}, got '{value}'"}],
        ) from None
    if value_type is int and abs(value) > MAX_ENTITY_ID:
        raise ValidationError(
            f"Invalid value for filter '{name}'",
            errors=[{"field": name, "message": f"'{value}' is out of range"}],
        )
    return value


def _as_int(value: Any, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default

"""Lifecycle Manager — bulk status transitions, soft delete and reordering."""

import logging
from datetime import datetime, timezone
from typing import Any

from content_admin.application.interfaces import EntityRepository
from content_admin.application.services.query_builder import live_criteria
from content_admin.application.services.resource_registry import ResourceRegistry
from content_admin.domain.entities import (
    BulkResult,
    Condition,
    MAX_ENTITY_ID,
    Operator,
    ResourceDescriptor,
    Status,
)
from content_admin.domain.exceptions import InvalidIdListError, ValidationError

logger = logging.getLogger(__name__)


def validate_id_list(id_list: Any) -> list[int]:
    """Return the ids when ``id_list`` is a non-empty list of positive ints.

    Raises:
        InvalidIdListError: otherwise. Booleans and numeric strings are
            rejected; the list must already hold integers.
    """
    if not isinstance(id_list, (list, tuple)) or not id_list:
        raise InvalidIdListError(id_list, "must be a non-empty list")
    for item in id_list:
        if isinstance(item, bool) or not isinstance(item, int) or item <= 0:
            raise InvalidIdListError(id_list, f"'{item}' is not a positive integer")
        if item > MAX_ENTITY_ID:
            raise InvalidIdListError(id_list, f"'{item}' is out of range")
    return list(dict.fromkeys(id_list))


class LifecycleManager:
    """Applies DRAFT/ENABLED/DISABLED transitions and soft delete in bulk.

    Ids that do not exist or are already soft-deleted are skipped silently;
    the returned BulkResult reports how many rows actually changed.
    """

    def __init__(self, registry: ResourceRegistry, repository: EntityRepository):
        self._registry = registry
        self._repository = repository

    async def set_status(
        self, resource_key: str, id_list: Any, target_status: Status | str
    ) -> BulkResult:
        descriptor = self._writable(resource_key)
        ids = validate_id_list(id_list)
        status = _parse_target_status(target_status)
        if descriptor.status_field is None:
            raise ValidationError(f"Resource '{resource_key}' has no status")

        count = await self._repository.update(
            descriptor.table,
            self._touch(descriptor, {descriptor.status_field: status.value}),
            where=self._targets(descriptor, ids),
        )
        logger.info("%s %s: %d of %d rows updated", status.value, resource_key, count, len(ids))
        return BulkResult(operation=_status_operation(status), count=count, ids=tuple(ids))

    async def soft_delete(self, resource_key: str, id_list: Any) -> BulkResult:
        descriptor = self._writable(resource_key)
        ids = validate_id_list(id_list)
        if descriptor.soft_delete_field is None:
            raise ValidationError(f"Resource '{resource_key}' does not support deletion")

        count = await self._repository.update(
            descriptor.table,
            self._touch(descriptor, {descriptor.soft_delete_field: 1}),
            where=self._targets(descriptor, ids),
        )
        logger.info("DELETE %s: %d of %d rows soft-deleted", resource_key, count, len(ids))
        return BulkResult(operation="DELETE", count=count, ids=tuple(ids))

    async def reorder(self, resource_key: str, id_list: Any) -> BulkResult:
        """Rank rows 1..n on the descriptor's fixed sort column in list order."""
        descriptor = self._writable(resource_key)
        ids = validate_id_list(id_list)
        if descriptor.fixed_sort_field is None:
            raise ValidationError(f"Resource '{resource_key}' has no fixed sort order")

        count = 0
        for rank, entity_id in enumerate(ids, start=1):
            count += await self._repository.update(
                descriptor.table,
                self._touch(descriptor, {descriptor.fixed_sort_field: rank}),
                where=self._targets(descriptor, [entity_id]),
            )
        logger.info("SORT %s: %d of %d rows ranked", resource_key, count, len(ids))
        return BulkResult(operation="SORT", count=count, ids=tuple(ids))

    def _writable(self, resource_key: str) -> ResourceDescriptor:
        descriptor = self._registry.describe(resource_key)
        if descriptor.read_only:
            raise ValidationError(f"Resource '{resource_key}' is read-only")
        return descriptor

    @staticmethod
    def _targets(descriptor: ResourceDescriptor, ids: list[int]) -> list:
        return [*live_criteria(descriptor), Condition(descriptor.id_field, Operator.IN, ids)]

    @staticmethod
    def _touch(descriptor: ResourceDescriptor, values: dict[str, Any]) -> dict[str, Any]:
        if descriptor.update_time_field:
            values[descriptor.update_time_field] = datetime.now(timezone.utc)
        return values


def _parse_target_status(value: Status | str) -> Status:
    try:
        status = Status(value)
    except ValueError:
        raise ValidationError(
            f"Unknown status '{value}'",
            errors=[{"field": "status", "message": "must be ENABLED or DISABLED"}],
        ) from None
    if status is Status.DRAFT:
        raise ValidationError(
            "Rows cannot be moved back to DRAFT",
            errors=[{"field": "status", "message": "must be ENABLED or DISABLED"}],
        )
    return status


def _status_operation(status: Status) -> str:
    return "ENABLE" if status is Status.ENABLED else "DISABLE"

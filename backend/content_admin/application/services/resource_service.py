"""Application service (use case) for generic resource operations."""

import logging
from datetime import datetime, timezone
from functools import partial
from typing import Any

from content_admin.application.interfaces import EntityRepository
from content_admin.application.services.audit_interceptor import AuditInterceptor
from content_admin.application.services.field_translator import FieldNameTranslator
from content_admin.application.services.lifecycle_manager import LifecycleManager
from content_admin.application.services.query_builder import QueryBuilder
from content_admin.application.services.resource_registry import ResourceRegistry
from content_admin.domain.entities import (
    BulkResult,
    Condition,
    ListRequest,
    MAX_ENTITY_ID,
    OperationType,
    Operator,
    PageResult,
    ResourceDescriptor,
    Status,
)
from content_admin.domain.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class ResourceService:
    """Orchestrates save/list/lifecycle logic for every registered resource.

    Every mutation runs through the AuditInterceptor so that successful
    operations leave an audit trail and failed ones leave none.
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        repository: EntityRepository,
        translator: FieldNameTranslator,
        query_builder: QueryBuilder,
        lifecycle: LifecycleManager,
        interceptor: AuditInterceptor,
    ):
        self._registry = registry
        self._repository = repository
        self._translator = translator
        self._query_builder = query_builder
        self._lifecycle = lifecycle
        self._interceptor = interceptor

    async def list(
        self, resource_key: str, request: ListRequest
    ) -> PageResult | list[dict[str, Any]]:
        return await self._query_builder.list(resource_key, request)

    async def detail(self, resource_key: str, entity_id: int) -> dict[str, Any]:
        return await self._query_builder.detail(resource_key, entity_id)

    async def save(
        self, resource_key: str, payload: dict[str, Any], operation_user: str
    ) -> int:
        """Create (no id) or update (id present) an entity from a wire payload.

        Returns the id of the saved entity.
        """
        descriptor = self._writable(resource_key)
        values = self._translator.to_storage(payload)
        entity_id = _parse_entity_id(values.pop(descriptor.id_field, None), descriptor.id_field)

        columns = self._repository.columns(descriptor.table)
        changes = {
            key: value
            for key, value in values.items()
            if key in columns and key not in descriptor.managed_fields
        }

        operation = OperationType.for_save(entity_id)
        if operation is OperationType.ADD:
            perform = partial(self._create, descriptor, changes)
        else:
            perform = partial(self._update, descriptor, entity_id, changes)
        return await self._interceptor.intercept(
            resource_key, operation, entity_id, perform, operation_user
        )

    async def enable(self, resource_key: str, id_list: Any, operation_user: str) -> BulkResult:
        return await self._bulk(
            resource_key,
            OperationType.ENABLE,
            id_list,
            lambda: self._lifecycle.set_status(resource_key, id_list, Status.ENABLED),
            operation_user,
        )

    async def disable(self, resource_key: str, id_list: Any, operation_user: str) -> BulkResult:
        return await self._bulk(
            resource_key,
            OperationType.DISABLE,
            id_list,
            lambda: self._lifecycle.set_status(resource_key, id_list, Status.DISABLED),
            operation_user,
        )

    async def delete(self, resource_key: str, id_list: Any, operation_user: str) -> BulkResult:
        return await self._bulk(
            resource_key,
            OperationType.DELETE,
            id_list,
            lambda: self._lifecycle.soft_delete(resource_key, id_list),
            operation_user,
        )

    async def reorder(self, resource_key: str, id_list: Any, operation_user: str) -> BulkResult:
        return await self._bulk(
            resource_key,
            OperationType.UPDATE,
            id_list,
            lambda: self._lifecycle.reorder(resource_key, id_list),
            operation_user,
        )

    async def _bulk(self, resource_key, operation_type, id_list, perform, operation_user):
        self._writable(resource_key)
        ids = id_list if isinstance(id_list, (list, tuple)) else None
        return await self._interceptor.intercept(
            resource_key, operation_type, ids, perform, operation_user
        )

    async def _create(self, descriptor: ResourceDescriptor, values: dict[str, Any]) -> int:
        if descriptor.status_field:
            values.setdefault(descriptor.status_field, Status.DRAFT.value)
            values[descriptor.status_field] = _parse_status(values[descriptor.status_field])
        self._validate(descriptor, values)

        now = datetime.now(timezone.utc)
        if descriptor.create_time_field:
            values[descriptor.create_time_field] = now
        if descriptor.update_time_field:
            values[descriptor.update_time_field] = now
        if descriptor.soft_delete_field:
            values[descriptor.soft_delete_field] = 0

        new_id = await self._repository.insert(descriptor.table, values)
        logger.info("Created %s#%s", descriptor.resource_key, new_id)
        return new_id

    async def _update(
        self, descriptor: ResourceDescriptor, entity_id: int, changes: dict[str, Any]
    ) -> int:
        rows = await self._query_builder.fetch_rows(descriptor, [entity_id])
        if not rows:
            raise NotFoundError(descriptor.resource_key, entity_id)
        existing = rows[0]

        if descriptor.status_field and descriptor.status_field in changes:
            status = _parse_status(changes[descriptor.status_field])
            current = existing.get(descriptor.status_field)
            if status == Status.DRAFT.value and current not in (None, Status.DRAFT.value):
                raise ValidationError(
                    "A published record cannot return to DRAFT",
                    errors=[{"field": "status", "message": "must be ENABLED or DISABLED"}],
                )
            changes[descriptor.status_field] = status
        self._validate(descriptor, {**existing, **changes})

        if descriptor.update_time_field:
            changes[descriptor.update_time_field] = datetime.now(timezone.utc)
        await self._repository.update(
            descriptor.table,
            changes,
            where=[Condition(descriptor.id_field, Operator.EQ, entity_id)],
        )
        logger.info("Updated %s#%s", descriptor.resource_key, entity_id)
        return entity_id

    def _validate(self, descriptor: ResourceDescriptor, record: dict[str, Any]) -> None:
        """DRAFT rows need only the draft fields; published rows need all of them."""
        required = list(descriptor.draft_required_fields)
        status = record.get(descriptor.status_field) if descriptor.status_field else None
        if status not in (None, Status.DRAFT.value):
            required.extend(descriptor.required_fields)

        errors = [
            {"field": self._translator.wire_key(name), "message": "is required"}
            for name in dict.fromkeys(required)
            if _is_blank(record.get(name))
        ]
        if errors:
            missing = ", ".join(error["field"] for error in errors)
            raise ValidationError(f"Missing required fields: {missing}", errors=errors)

    def _writable(self, resource_key: str) -> ResourceDescriptor:
        descriptor = self._registry.describe(resource_key)
        if descriptor.read_only:
            raise ValidationError(f"Resource '{resource_key}' is read-only")
        return descriptor


def _parse_entity_id(value: Any, field_name: str) -> int | None:
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        value = int(value)
    if value in (None, "", 0):
        return None
    if isinstance(value, bool) or not isinstance(value, int) or not 0 < value <= MAX_ENTITY_ID:
        raise ValidationError(
            f"Invalid {field_name}",
            errors=[{"field": field_name, "message": "must be a positive integer"}],
        )
    return value


def _parse_status(value: Any) -> str:
    try:
        return Status(value).value
    except ValueError:
        raise ValidationError(
            f"Unknown status '{value}'",
            errors=[{"field": "status", "message": "must be DRAFT, ENABLED or DISABLED"}],
        ) from None


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == []

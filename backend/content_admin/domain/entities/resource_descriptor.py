"""Domain entity — static per-resource metadata driving the generic engine."""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Status(str, Enum):
    """Shared lifecycle status of every content resource."""

    DRAFT = "DRAFT"
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"


def camel_to_snake(name: str) -> str:
    return re.sub(r"[A-Z]", lambda m: "_" + m.group(0).lower(), name)


@dataclass(frozen=True)
class ResourceDescriptor:
    """Describes how one business resource is stored, searched and listed.

    All field names are in the storage convention (``cover_img_url``).
    ``filterable_fields`` maps a column to the Python type filter values are
    coerced to. When ``fixed_sort_field`` is set, client ordering is ignored
    and rows are always ordered by that column then by id, both ascending.
    """

    resource_key: str
    table: str
    id_field: str = "id"
    search_text_field: str = "name"
    extra_search_fields: tuple[str, ...] = ()
    filterable_fields: Mapping[str, type] = field(default_factory=dict)
    paginated: bool = True
    smart_search: bool = True
    fixed_sort_field: str | None = None
    default_order_field: str | None = None
    soft_delete_field: str | None = "is_deleted"
    status_field: str | None = "status"
    update_time_field: str | None = "update_time"
    create_time_field: str | None = "create_time"
    draft_required_fields: tuple[str, ...] = ("name",)
    required_fields: tuple[str, ...] = ()
    read_only: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "filterable_fields", MappingProxyType(dict(self.filterable_fields))
        )

    @property
    def biz_type(self) -> str:
        """Audit category for this resource, e.g. ``biz_sound``."""
        return f"biz_{camel_to_snake(self.resource_key)}"

    @property
    def search_fields(self) -> tuple[str, ...]:
        return (self.search_text_field, *self.extra_search_fields)

    @property
    def order_field(self) -> str:
        return self.default_order_field or self.id_field

    @property
    def managed_fields(self) -> frozenset[str]:
        """Columns maintained by the engine and never taken from a payload."""
        names = {
            self.id_field,
            self.soft_delete_field,
            self.update_time_field,
            self.create_time_field,
        }
        return frozenset(name for name in names if name)

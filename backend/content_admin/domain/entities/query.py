"""Domain entities for generic listing: criteria, ordering, pages, bulk results."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Largest id a signed 64-bit INTEGER column can hold.
MAX_ENTITY_ID = 2**63 - 1


class Operator(str, Enum):
    EQ = "eq"
    IN = "in"
    CONTAINS = "contains"


@dataclass(frozen=True)
class Condition:
    """A single predicate on a storage column."""

    column: str
    operator: Operator
    value: Any


@dataclass(frozen=True)
class AnyOf:
    """Conditions combined with logical OR."""

    conditions: tuple[Condition, ...]


Criterion = Condition | AnyOf


@dataclass(frozen=True)
class SortKey:
    column: str
    descending: bool = False


@dataclass
class ListRequest:
    """Listing parameters as received at the API boundary.

    ``filters`` and ``order_by`` use wire names; the query builder
    translates, validates and clamps everything.
    """

    page_index: int = 1
    page_size: int = 10
    keywords: str | None = None
    filters: dict[str, Any] = field(default_factory=dict)
    order_by: str | None = None
    order_direction: str | None = None


@dataclass
class PageResult:
    rows: list[dict[str, Any]]
    total: int
    page_index: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0


@dataclass(frozen=True)
class BulkResult:
    """Outcome of a bulk lifecycle transition."""

    operation: str
    count: int
    ids: tuple[int, ...] = ()

    def summary(self) -> dict[str, Any]:
        return {"operation": self.operation, "count": self.count}

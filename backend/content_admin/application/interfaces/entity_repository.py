"""Abstract repository interface (port) for table-generic row persistence."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from content_admin.domain.entities import Criterion, SortKey


class EntityRepository(ABC):
    """Port for reading and writing rows of any resource table.

    Rows are plain dicts keyed by storage column names. All criteria in a
    ``where`` sequence are combined with logical AND.
    """

    @abstractmethod
    def columns(self, table: str) -> frozenset[str]:
        """Return the storage column names of a table."""
        ...

    @abstractmethod
    async def find(
        self,
        table: str,
        *,
        where: Sequence[Criterion] = (),
        order_by: Sequence[SortKey] = (),
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Retrieve rows matching every criterion, in the requested order."""
        ...

    @abstractmethod
    async def count(self, table: str, *, where: Sequence[Criterion] = ()) -> int:
        """Count rows matching every criterion."""
        ...

    @abstractmethod
    async def insert(self, table: str, values: dict[str, Any]) -> int:
        """Insert one row and return its generated id."""
        ...

    @abstractmethod
    async def update(
        self, table: str, values: dict[str, Any], *, where: Sequence[Criterion]
    ) -> int:
        """Update every matching row. Returns the number of rows changed."""
        ...

"""Unit tests for the LifecycleManager against an in-memory SQLite database."""

import pytest

from content_admin.application.services import LifecycleManager, QueryBuilder, validate_id_list
from content_admin.domain.entities import ListRequest, Status
from content_admin.domain.exceptions import InvalidIdListError, NotFoundError, ValidationError


@pytest.fixture
def lifecycle(registry, repository) -> LifecycleManager:
    return LifecycleManager(registry, repository)


async def _seed(repository, table: str = "music", count: int = 3) -> None:
    for i in range(1, count + 1):
        row = {"id": i, "name": f"Row {i}", "status": "DRAFT"}
        if table == "category":
            row["sort"] = i
        await repository.insert(table, row)


@pytest.mark.parametrize(
    "id_list",
    [[], None, "1,2", [0], [-3], [1, "2"], [True], [1.5], {"ids": [1]}, [2**63]],
)
def test_validate_id_list_rejects_bad_input(id_list):
    with pytest.raises(InvalidIdListError):
        validate_id_list(id_list)


def test_validate_id_list_deduplicates_in_order():
    assert validate_id_list([3, 1, 3, 2]) == [3, 1, 2]


@pytest.mark.asyncio
async def test_set_status_counts_only_existing_rows(lifecycle: LifecycleManager, repository):
    await _seed(repository)

    result = await lifecycle.set_status("music", [1, 999], Status.ENABLED)

    assert result.count == 1
    assert result.operation == "ENABLE"
    rows = await repository.find("music")
    assert {row["id"]: row["status"] for row in rows} == {1: "ENABLED", 2: "DRAFT", 3: "DRAFT"}


@pytest.mark.asyncio
async def test_enabled_and_disabled_toggle_freely(lifecycle: LifecycleManager, repository):
    await _seed(repository)

    await lifecycle.set_status("music", [1, 2], "ENABLED")
    result = await lifecycle.set_status("music", [1, 2], "DISABLED")
    again = await lifecycle.set_status("music", [1], "ENABLED")

    assert result.count == 2
    assert result.operation == "DISABLE"
    assert again.count == 1


@pytest.mark.asyncio
async def test_set_status_to_draft_is_rejected(lifecycle: LifecycleManager, repository):
    await _seed(repository)

    with pytest.raises(ValidationError):
        await lifecycle.set_status("music", [1], Status.DRAFT)
    with pytest.raises(ValidationError):
        await lifecycle.set_status("music", [1], "ARCHIVED")


@pytest.mark.asyncio
async def test_invalid_id_list_fails_before_touching_rows(lifecycle: LifecycleManager, repository):
    await _seed(repository)

    with pytest.raises(InvalidIdListError):
        await lifecycle.set_status("music", [1, -1], Status.ENABLED)

    rows = await repository.find("music")
    assert all(row["status"] == "DRAFT" for row in rows)


@pytest.mark.asyncio
async def test_soft_delete_hides_rows_and_is_idempotent(
    lifecycle: LifecycleManager, repository, query_builder: QueryBuilder
):
    await _seed(repository)

    first = await lifecycle.soft_delete("music", [2])
    second = await lifecycle.soft_delete("music", [2])

    assert first.count == 1
    assert second.count == 0
    page = await query_builder.list("music", ListRequest())
    assert [row["id"] for row in page.rows] == [3, 1]
    with pytest.raises(NotFoundError):
        await query_builder.detail("music", 2)

    # Physically retained.
    assert len(await repository.find("music")) == 3


@pytest.mark.asyncio
async def test_status_change_skips_soft_deleted_rows(lifecycle: LifecycleManager, repository):
    await _seed(repository)
    await lifecycle.soft_delete("music", [3])

    result = await lifecycle.set_status("music", [1, 3], Status.ENABLED)

    assert result.count == 1


@pytest.mark.asyncio
async def test_reorder_ranks_rows_in_list_order(
    lifecycle: LifecycleManager, repository, query_builder: QueryBuilder
):
    await _seed(repository, "category")

    result = await lifecycle.reorder("category", [3, 1, 2, 404])

    assert result.count == 3
    rows = await query_builder.list("category", ListRequest())
    assert [(row["id"], row["sort"]) for row in rows] == [(3, 1), (1, 2), (2, 3)]


@pytest.mark.asyncio
async def test_reorder_requires_a_fixed_sort_resource(lifecycle: LifecycleManager):
    with pytest.raises(ValidationError):
        await lifecycle.reorder("music", [1])


@pytest.mark.asyncio
async def test_audit_log_is_read_only(lifecycle: LifecycleManager):
    with pytest.raises(ValidationError):
        await lifecycle.soft_delete("opLogs", [1])

"""Unit tests for the QueryBuilder against an in-memory SQLite database."""

import pytest

from content_admin.application.services import QueryBuilder
from content_admin.domain.entities import ListRequest, PageResult
from content_admin.domain.exceptions import NotFoundError, UnknownResourceError, ValidationError
from content_admin.infrastructure.database.repositories import SQLAlchemyEntityRepository


async def _seed_sounds(repository: SQLAlchemyEntityRepository) -> None:
    rows = [
        {"id": 7, "name": "Breathe in", "status": "ENABLED", "gender_code": "FEMALE"},
        {"id": 42, "name": "Welcome", "status": "ENABLED", "gender_code": "MALE"},
        {"id": 43, "name": "Countdown 42", "status": "DISABLED", "gender_code": "FEMALE"},
        {"id": 44, "name": "Take 42 breaths", "status": "DRAFT", "gender_code": "MALE"},
        {"id": 45, "name": "Removed 42", "status": "ENABLED", "gender_code": "MALE", "is_deleted": 1},
    ]
    for row in rows:
        await repository.insert("sound", row)


@pytest.mark.asyncio
async def test_numeric_keyword_matching_an_id_returns_only_that_row(
    query_builder: QueryBuilder, repository
):
    await _seed_sounds(repository)

    page = await query_builder.list("sound", ListRequest(keywords="42"))

    assert isinstance(page, PageResult)
    assert [row["id"] for row in page.rows] == [42]
    assert page.total == 1


@pytest.mark.asyncio
async def test_id_match_drops_other_filters(query_builder: QueryBuilder, repository):
    await _seed_sounds(repository)

    page = await query_builder.list(
        "sound", ListRequest(keywords=" 42 ", filters={"genderCode": "FEMALE"})
    )

    assert [row["id"] for row in page.rows] == [42]


@pytest.mark.asyncio
async def test_numeric_keyword_without_id_falls_back_to_name_search(
    query_builder: QueryBuilder, repository
):
    await _seed_sounds(repository)

    empty = await query_builder.list("sound", ListRequest(keywords="9999999"))
    assert empty.rows == []
    assert empty.total == 0

    await repository.insert("sound", {"id": 50, "name": "Track 9999999", "status": "DRAFT"})
    found = await query_builder.list("sound", ListRequest(keywords="9999999"))
    assert [row["id"] for row in found.rows] == [50]


@pytest.mark.asyncio
async def test_keyword_beyond_the_id_range_searches_names(query_builder: QueryBuilder, repository):
    await repository.insert("sound", {"id": 1, "name": "Barcode 123456789012345678901"})

    page = await query_builder.list("sound", ListRequest(keywords="123456789012345678901"))

    assert [row["id"] for row in page.rows] == [1]


@pytest.mark.asyncio
async def test_soft_deleted_row_id_is_not_an_id_match(query_builder: QueryBuilder, repository):
    await _seed_sounds(repository)

    page = await query_builder.list("sound", ListRequest(keywords="45"))

    assert page.rows == []


@pytest.mark.asyncio
async def test_text_keyword_is_case_insensitive_substring(query_builder: QueryBuilder, repository):
    await _seed_sounds(repository)

    page = await query_builder.list("sound", ListRequest(keywords="BREATH"))

    assert {row["id"] for row in page.rows} == {7, 44}


@pytest.mark.asyncio
async def test_like_wildcards_in_keywords_are_literal(query_builder: QueryBuilder, repository):
    await _seed_sounds(repository)

    page = await query_builder.list("sound", ListRequest(keywords="%"))

    assert page.rows == []


@pytest.mark.asyncio
async def test_filters_accept_list_suffix_and_comma_values(query_builder: QueryBuilder, repository):
    await _seed_sounds(repository)

    page = await query_builder.list(
        "sound", ListRequest(filters={"statusList": "ENABLED,DISABLED", "genderCode": "FEMALE"})
    )

    assert [row["id"] for row in page.rows] == [43, 7]


@pytest.mark.asyncio
async def test_unknown_filters_are_ignored(query_builder: QueryBuilder, repository):
    await _seed_sounds(repository)

    page = await query_builder.list("sound", ListRequest(filters={"colourCode": "RED"}))

    assert page.total == 4


@pytest.mark.asyncio
async def test_uncoercible_filter_value_raises(query_builder: QueryBuilder):
    with pytest.raises(ValidationError):
        await query_builder.list("workout", ListRequest(filters={"premium": "yes"}))


@pytest.mark.asyncio
async def test_integer_filter_beyond_the_id_range_raises(query_builder: QueryBuilder):
    with pytest.raises(ValidationError):
        await query_builder.list("workout", ListRequest(filters={"premium": "9" * 25}))


@pytest.mark.asyncio
async def test_default_order_is_id_descending(query_builder: QueryBuilder, repository):
    await _seed_sounds(repository)

    page = await query_builder.list("sound", ListRequest())

    assert [row["id"] for row in page.rows] == [44, 43, 42, 7]


@pytest.mark.asyncio
async def test_order_by_wire_field_ascending(query_builder: QueryBuilder, repository):
    await _seed_sounds(repository)

    page = await query_builder.list(
        "sound", ListRequest(order_by="name", order_direction="ASC")
    )

    assert [row["name"] for row in page.rows] == [
        "Breathe in",
        "Countdown 42",
        "Take 42 breaths",
        "Welcome",
    ]


@pytest.mark.asyncio
async def test_unknown_order_by_falls_back_to_id(query_builder: QueryBuilder, repository):
    await _seed_sounds(repository)

    page = await query_builder.list("sound", ListRequest(order_by="nonsense"))

    assert [row["id"] for row in page.rows] == [44, 43, 42, 7]


@pytest.mark.asyncio
async def test_pagination_is_clamped(query_builder: QueryBuilder, repository):
    await _seed_sounds(repository)

    page = await query_builder.list("sound", ListRequest(page_index=0, page_size=500))
    assert page.page_index == 1
    assert page.page_size == 100

    second = await query_builder.list("sound", ListRequest(page_index=2, page_size=3))
    assert [row["id"] for row in second.rows] == [7]
    assert second.total == 4
    assert second.total_pages == 2


@pytest.mark.asyncio
async def test_rows_are_wire_records_without_soft_delete_flag(
    query_builder: QueryBuilder, repository
):
    await repository.insert(
        "sound", {"id": 1, "name": "Intro", "female_audio_url": "f.mp3", "status": "DRAFT"}
    )

    page = await query_builder.list("sound", ListRequest())
    row = page.rows[0]

    assert row["femaleAudioUrl"] == "f.mp3"
    assert "createTime" in row
    assert "isDeleted" not in row
    assert "is_deleted" not in row


@pytest.mark.asyncio
async def test_fixed_sort_ignores_client_ordering(query_builder: QueryBuilder, repository):
    for row in (
        {"id": 1, "name": "Yoga", "sort": 2},
        {"id": 2, "name": "HIIT", "sort": 1},
        {"id": 3, "name": "Pilates", "sort": 2},
    ):
        await repository.insert("category", row)

    default = await query_builder.list("category", ListRequest())
    by_name = await query_builder.list(
        "category", ListRequest(order_by="name", order_direction="desc")
    )

    assert isinstance(default, list)
    assert [row["id"] for row in default] == [2, 1, 3]
    assert [row["id"] for row in by_name] == [2, 1, 3]


@pytest.mark.asyncio
async def test_non_paginated_resource_returns_every_row(query_builder: QueryBuilder, repository):
    for i in range(1, 16):
        await repository.insert("category", {"id": i, "name": f"Category {i}", "sort": i})

    rows = await query_builder.list("category", ListRequest(page_size=5))

    assert len(rows) == 15


@pytest.mark.asyncio
async def test_detail_excludes_soft_deleted_rows(query_builder: QueryBuilder, repository):
    await _seed_sounds(repository)

    assert (await query_builder.detail("sound", 42))["name"] == "Welcome"
    with pytest.raises(NotFoundError):
        await query_builder.detail("sound", 45)
    with pytest.raises(NotFoundError):
        await query_builder.detail("sound", 999)
    with pytest.raises(NotFoundError):
        await query_builder.detail("sound", 2**64)


@pytest.mark.asyncio
async def test_unknown_resource_raises(query_builder: QueryBuilder):
    with pytest.raises(UnknownResourceError):
        await query_builder.list("spaceship", ListRequest())

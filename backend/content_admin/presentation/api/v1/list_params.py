"""Parsing of generic listing query strings into a ListRequest."""

from typing import Any

from fastapi import Query, Request

from content_admin.domain.entities import ListRequest

_RESERVED = frozenset({"pageIndex", "pageSize", "keywords", "orderBy", "orderDirection"})


def get_list_request(
    request: Request,
    page_index: int = Query(1, alias="pageIndex", description="1-based page number"),
    page_size: int = Query(10, alias="pageSize", description="Rows per page, clamped to 1-100"),
    keywords: str | None = Query(None, description="Id or name search"),
    order_by: str | None = Query(None, alias="orderBy"),
    order_direction: str | None = Query(None, alias="orderDirection"),
) -> ListRequest:
    """Every query parameter that is not a paging or sort control is a filter.

    Repeated parameters become lists; comma-delimited values are split later.
    """
    filters: dict[str, Any] = {}
    for name, value in request.query_params.multi_items():
        if name in _RESERVED:
            continue
        if name in filters:
            existing = filters[name]
            filters[name] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            filters[name] = value

    return ListRequest(
        page_index=page_index,
        page_size=page_size,
        keywords=keywords,
        filters=filters,
        order_by=order_by,
        order_direction=order_direction,
    )

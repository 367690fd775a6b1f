"""Response envelope shared by every endpoint except the health check."""

from typing import Any

from content_admin.application.schemas import ApiResponse
from content_admin.application.wire_format import format_wire
from content_admin.domain.entities import PageResult


def page_payload(page: PageResult) -> dict[str, Any]:
    return {
        "data": page.rows,
        "total": page.total,
        "pageIndex": page.page_index,
        "pageSize": page.page_size,
        "totalPages": page.total_pages,
    }


def success(data: Any = None) -> dict[str, Any]:
    if isinstance(data, PageResult):
        data = page_payload(data)
    return ApiResponse(success=True, data=format_wire(data)).model_dump(by_alias=True)


def failure(err_code: str, err_message: str, data: Any = None) -> dict[str, Any]:
    return ApiResponse(
        success=False, data=data, err_code=err_code, err_message=err_message
    ).model_dump(by_alias=True)

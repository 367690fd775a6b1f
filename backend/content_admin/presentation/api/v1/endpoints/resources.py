"""Generic resource endpoints — one set of routes serves every registered resource."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from content_admin.application.schemas import IdListRequest
from content_admin.application.services import ResourceService
from content_admin.domain.entities import ListRequest
from content_admin.infrastructure.dependencies import get_operation_user, get_resource_service
from content_admin.presentation.api.responses import success
from content_admin.presentation.api.v1.list_params import get_list_request

router = APIRouter(tags=["Resources"])


@router.get("/{resource_key}/page")
async def page_resources(
    resource_key: str,
    list_request: ListRequest = Depends(get_list_request),
    service: ResourceService = Depends(get_resource_service),
) -> dict:
    """Paginated listing; resources listed in full return a flat array."""
    return success(await service.list(resource_key, list_request))


@router.get("/{resource_key}/list")
async def list_resources(
    resource_key: str,
    list_request: ListRequest = Depends(get_list_request),
    service: ResourceService = Depends(get_resource_service),
) -> dict:
    """Listing in the shape the resource declares (flat array or page)."""
    return success(await service.list(resource_key, list_request))


@router.get("/{resource_key}/detail/{entity_id}")
async def get_resource(
    resource_key: str,
    entity_id: int,
    service: ResourceService = Depends(get_resource_service),
) -> dict:
    return success(await service.detail(resource_key, entity_id))


@router.post("/{resource_key}/save")
async def save_resource(
    resource_key: str,
    payload: dict[str, Any] = Body(..., examples=[{"name": "Morning stretch", "status": "DRAFT"}]),
    service: ResourceService = Depends(get_resource_service),
    operation_user: str = Depends(get_operation_user),
) -> dict:
    """Create when the body has no id, update when it has one."""
    entity_id = await service.save(resource_key, payload, operation_user)
    return success({"id": entity_id})


@router.post("/{resource_key}/enable")
async def enable_resources(
    resource_key: str,
    body: IdListRequest,
    service: ResourceService = Depends(get_resource_service),
    operation_user: str = Depends(get_operation_user),
) -> dict:
    result = await service.enable(resource_key, body.id_list, operation_user)
    return success({"updatedCount": result.count})


@router.post("/{resource_key}/disable")
async def disable_resources(
    resource_key: str,
    body: IdListRequest,
    service: ResourceService = Depends(get_resource_service),
    operation_user: str = Depends(get_operation_user),
) -> dict:
    result = await service.disable(resource_key, body.id_list, operation_user)
    return success({"updatedCount": result.count})


@router.post("/{resource_key}/del")
async def delete_resources(
    resource_key: str,
    body: IdListRequest,
    service: ResourceService = Depends(get_resource_service),
    operation_user: str = Depends(get_operation_user),
) -> dict:
    """Soft delete: rows are kept but disappear from every read."""
    result = await service.delete(resource_key, body.id_list, operation_user)
    return success({"deletedCount": result.count})


@router.post("/{resource_key}/sort")
async def sort_resources(
    resource_key: str,
    body: IdListRequest,
    service: ResourceService = Depends(get_resource_service),
    operation_user: str = Depends(get_operation_user),
) -> dict:
    """Rank rows 1..n in idList order on the resource's fixed sort column."""
    result = await service.reorder(resource_key, body.id_list, operation_user)
    return success({"updatedCount": result.count})

"""Audit log query endpoints."""

from fastapi import APIRouter, Depends

from content_admin.application.services import AuditLogStore
from content_admin.domain.entities import ListRequest
from content_admin.infrastructure.dependencies import get_audit_log_store
from content_admin.presentation.api.responses import success
from content_admin.presentation.api.v1.list_params import get_list_request

router = APIRouter(prefix="/opLogs", tags=["Audit Logs"])


@router.get("/page")
async def page_op_logs(
    list_request: ListRequest = Depends(get_list_request),
    store: AuditLogStore = Depends(get_audit_log_store),
) -> dict:
    """Filter by bizType, operationTypeList, operationUser; search dataInfo."""
    return success(await store.list(list_request))


@router.get("/detail/{entry_id}")
async def get_op_log(
    entry_id: int,
    store: AuditLogStore = Depends(get_audit_log_store),
) -> dict:
    return success(await store.detail(entry_id))

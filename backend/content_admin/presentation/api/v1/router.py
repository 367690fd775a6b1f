"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from content_admin.presentation.api.v1.endpoints.health import router as health_router
from content_admin.presentation.api.v1.endpoints.op_logs import router as op_logs_router
from content_admin.presentation.api.v1.endpoints.resources import router as resources_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
# Registered before the generic routes so /opLogs/page is not taken as a resource key.
router.include_router(op_logs_router)
router.include_router(resources_router)

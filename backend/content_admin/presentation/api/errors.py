"""Exception handlers translating domain errors into the response envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from content_admin.domain.exceptions import ContentAdminError, ValidationError
from content_admin.presentation.api.responses import failure

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on the application."""

    @app.exception_handler(ContentAdminError)
    async def content_admin_error_handler(request: Request, exc: ContentAdminError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        data = exc.errors if isinstance(exc, ValidationError) and exc.errors else None
        return JSONResponse(
            status_code=exc.status_code,
            content=failure(exc.err_code, exc.message, data),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=failure(ValidationError.err_code, "Invalid request parameters", errors),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure("INTERNAL_ERROR", "Internal server error"),
        )

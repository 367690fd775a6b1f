"""Pydantic DTOs (Data Transfer Objects) shared by the generic resource endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class IdListRequest(BaseModel):
    """Body of the bulk enable/disable/delete/sort endpoints.

    Ids are validated by the lifecycle manager, not here, so that a bad
    list is reported as ``INVALID_ID_LIST``.
    """

    id_list: list[Any] = Field(..., alias="idList", examples=[[1, 2, 3]])

    model_config = {"populate_by_name": True}


class ApiResponse(BaseModel):
    """Envelope returned by every endpoint except the health check."""

    success: bool
    data: Any = None
    err_code: str | None = Field(None, alias="errCode")
    err_message: str | None = Field(None, alias="errMessage")

    model_config = {"populate_by_name": True}

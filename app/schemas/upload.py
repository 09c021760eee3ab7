"""Upload proxy response schemas."""

from typing import Any

from pydantic import BaseModel


class UploadResponse(BaseModel):
    success: bool = True
    filename: str | None = None
    url: str
    public_id: str


class UploadListResponse(BaseModel):
    success: bool = True
    resources: list[dict[str, Any]]
    next_cursor: str | None = None

"""
Upload endpoints - pass-through to the media host (Cloudinary).
Challenge: Reject non-images and oversized files before anything leaves the process.
"""

import logging

from fastapi import APIRouter, File, Query, UploadFile

from app.config import get_settings
from app.core.dependencies import MediaHostDep
from app.core.errors import InvalidInput, PayloadTooLarge
from app.schemas.upload import UploadListResponse, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


@router.post("", response_model=UploadResponse)
async def upload_image(media: MediaHostDep, image: UploadFile | None = File(None)):
    """Single multipart field `image`, image/* only, at most upload_max_bytes."""
    if image is None:
        raise InvalidInput("No file uploaded")
    if not (image.content_type or "").startswith("image/"):
        raise InvalidInput("Only images allowed")
    data = await image.read(settings.upload_max_bytes + 1)
    if len(data) > settings.upload_max_bytes:
        raise PayloadTooLarge(f"File too large (max {settings.upload_max_bytes // (1024 * 1024)}MB)")

    result = await media.upload_image(data, filename=image.filename, folder=settings.upload_folder)
    logger.info("Uploaded %s as %s", image.filename, result.get("public_id"))
    return UploadResponse(
        filename=image.filename,
        url=result["secure_url"],
        public_id=result["public_id"],
    )


@router.get("/list", response_model=UploadListResponse)
async def list_uploads(
    media: MediaHostDep,
    folder: str = Query(settings.upload_folder),
    max_results: int = Query(settings.upload_list_default_size, ge=1, le=500),
    next_cursor: str | None = None,
):
    """One page of uploaded images under `folder`; pass next_cursor back for the next page."""
    page = await media.list_images(folder=folder, max_results=max_results, next_cursor=next_cursor)
    return UploadListResponse(resources=page["resources"], next_cursor=page["next_cursor"])

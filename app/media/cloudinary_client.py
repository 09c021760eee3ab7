"""
Cloudinary client - media host for listing images.
Challenge: The SDK is blocking; requests must not stall the event loop.
Design: Single configured instance behind a FastAPI dependency so tests can swap it.
"""

import io
import logging
from typing import Any

import cloudinary
import cloudinary.api
import cloudinary.exceptions
import cloudinary.uploader
from starlette.concurrency import run_in_threadpool

from app.config import get_settings
from app.core.errors import UpstreamError

logger = logging.getLogger(__name__)

settings = get_settings()

_media_host: "CloudinaryMediaHost | None" = None


class CloudinaryMediaHost:
    """Thin async facade over the Cloudinary upload and admin APIs."""

    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )

    async def upload_image(self, data: bytes, *, filename: str | None, folder: str) -> dict[str, Any]:
        """Upload raw bytes into `folder`. Returns Cloudinary's result (secure_url, public_id, ...)."""
        stream = io.BytesIO(data)
        stream.name = filename or "upload"
        try:
            return await run_in_threadpool(
                cloudinary.uploader.upload,
                stream,
                folder=folder,
                resource_type="auto",
            )
        except cloudinary.exceptions.Error as exc:
            logger.warning("Cloudinary upload failed: %s", exc)
            raise UpstreamError("Upload failed", error=str(exc)) from exc

    async def list_images(
        self,
        *,
        folder: str,
        max_results: int,
        next_cursor: str | None = None,
    ) -> dict[str, Any]:
        """List uploaded resources under `folder/`, one page at a time."""
        options: dict[str, Any] = {
            "type": "upload",
            "prefix": f"{folder}/",
            "max_results": max_results,
        }
        if next_cursor:
            options["next_cursor"] = next_cursor
        try:
            result = await run_in_threadpool(cloudinary.api.resources, **options)
        except cloudinary.exceptions.Error as exc:
            logger.warning("Cloudinary listing failed for folder=%r: %s", folder, exc)
            raise UpstreamError("Could not list uploads", error=str(exc)) from exc
        return {
            "resources": list(result.get("resources") or []),
            "next_cursor": result.get("next_cursor"),
        }


def get_media_host() -> CloudinaryMediaHost:
    """Get the configured media host. Used as FastAPI dependency."""
    global _media_host
    if _media_host is None:
        _media_host = CloudinaryMediaHost(
            settings.cloudinary_cloud_name,
            settings.cloudinary_api_key,
            settings.cloudinary_api_secret,
        )
    return _media_host

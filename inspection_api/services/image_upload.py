"""
Image storage in GridFS.

Uploads never raise: a failed upload comes back as an
``ImageUploadResult`` with ``success=False`` and the reason in ``error``.
"""
import random
import string
import time
from typing import Optional, Tuple, Union

from bson import ObjectId
from bson.errors import InvalidId
from gridfs.errors import NoFile
from pymongo.errors import PyMongoError

from inspection_api.core import database
from inspection_api.core.config import settings
from inspection_api.core.errors import NotFoundError
from inspection_api.core.logger import get_logger
from inspection_api.models.upload import ImageUploadResult

logger = get_logger(__name__)

BASE36 = string.digits + string.ascii_lowercase


def generate_upload_id() -> str:
    suffix = "".join(random.choices(BASE36, k=9))
    return f"upload_{int(time.time() * 1000)}_{suffix}"


def build_image_url(file_id: str) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/images/{file_id}"


async def upload_image(content: bytes, filename: str, folder: str = "uploads",
                       content_type: Optional[str] = None) -> ImageUploadResult:
    upload_id = generate_upload_id()
    file_name = f"{upload_id}_{filename}"

    try:
        file_id = await database.get_image_bucket().upload_from_stream(
            f"{folder}/{file_name}",
            content,
            metadata={"folder": folder, "content_type": content_type or "application/octet-stream"},
        )
    except PyMongoError as e:
        logger.error(f"Image upload error for {filename}: {e}")
        return ImageUploadResult(success=False, status="error", error=str(e) or "Unknown upload error")

    logger.info(f"Uploaded {file_name} ({len(content)} bytes) as {file_id}")
    return ImageUploadResult(
        success=True,
        status="verified",
        server_url=build_image_url(str(file_id)),
        upload_id=upload_id,
        file_name=file_name,
    )


async def read_image(file_id: str) -> Tuple[bytes, str]:
    """Return the stored bytes and content type for an uploaded image."""
    try:
        grid_out = await database.get_image_bucket().open_download_stream(ObjectId(file_id))
    except (InvalidId, NoFile):
        raise NotFoundError(f"Image '{file_id}' not found")
    content = await grid_out.read()
    content_type = (grid_out.metadata or {}).get("content_type", "application/octet-stream")
    return content, content_type


def get_full_image_url(url: Optional[str]) -> str:
    return url or ""


def get_display_url(result: Union[ImageUploadResult, str]) -> str:
    if isinstance(result, str):
        return result
    return result.server_url or result.preview_url or ""

from typing import Literal, Optional

from inspection_api.models.base import CamelModel


class ImageUploadResult(CamelModel):
    success: bool
    status: Literal["uploading", "uploaded", "verified", "unverified", "error"]
    server_url: Optional[str] = None
    preview_url: Optional[str] = None
    upload_id: Optional[str] = None
    file_name: Optional[str] = None
    error: Optional[str] = None

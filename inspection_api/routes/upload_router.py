from fastapi import APIRouter, Depends, File, Form, Response, UploadFile

from inspection_api.core.logger import get_logger
from inspection_api.core.session import SessionContext
from inspection_api.models.upload import ImageUploadResult
from inspection_api.routes.dependencies import require_user
from inspection_api.services import image_upload

upload_router = APIRouter(prefix="/images", tags=["Images"])
logger = get_logger(__name__)


@upload_router.post("", response_model=ImageUploadResult, response_model_exclude_none=True)
async def upload(file: UploadFile = File(...), folder: str = Form("uploads"),
                 session: SessionContext = Depends(require_user)):
    content = await file.read()
    logger.info(f"Image upload {file.filename} ({len(content)} bytes) into {folder} by {session.user_id}")
    return await image_upload.upload_image(content, file.filename or "image", folder, file.content_type)


@upload_router.get("/{file_id}")
async def download(file_id: str):
    """Public: the URLs handed out by uploads are embedded in reports and labels."""
    content, content_type = await image_upload.read_image(file_id)
    return Response(content=content, media_type=content_type)

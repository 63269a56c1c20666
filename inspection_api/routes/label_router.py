from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException

from inspection_api.core.session import SessionContext
from inspection_api.models.label import LabelTemplateInput
from inspection_api.models.response import MessageResponse
from inspection_api.routes.dependencies import require_user
from inspection_api.services import label_service

label_router = APIRouter(prefix="/labels", tags=["Labels"])


@label_router.get("", response_model=List[Dict[str, Any]])
async def list_templates(archived: Optional[bool] = None, session: SessionContext = Depends(require_user)):
    return await label_service.get_all_templates(archived)


@label_router.get("/active", response_model=List[Dict[str, Any]])
async def active_templates(session: SessionContext = Depends(require_user)):
    return await label_service.get_active_templates()


@label_router.get("/archived", response_model=List[Dict[str, Any]])
async def archived_templates(session: SessionContext = Depends(require_user)):
    return await label_service.get_archived_templates()


@label_router.post("", status_code=201)
async def create_template(payload: LabelTemplateInput, session: SessionContext = Depends(require_user)):
    return await label_service.create_template(payload.model_dump(exclude_none=True), created_by=session.user_id)


@label_router.get("/{template_id}")
async def get_template(template_id: str, session: SessionContext = Depends(require_user)):
    return await label_service.get_template(template_id)


@label_router.put("/{template_id}")
async def update_template(template_id: str, payload: LabelTemplateInput,
                          session: SessionContext = Depends(require_user)):
    return await label_service.update_template(template_id, payload.model_dump(exclude_none=True))


@label_router.post("/{template_id}/archive")
async def archive_template(template_id: str, session: SessionContext = Depends(require_user)):
    return await label_service.set_archived(template_id, True)


@label_router.post("/{template_id}/restore")
async def restore_template(template_id: str, session: SessionContext = Depends(require_user)):
    return await label_service.set_archived(template_id, False)


@label_router.delete("/{template_id}", response_model=MessageResponse)
async def delete_template(template_id: str, session: SessionContext = Depends(require_user)):
    if not await label_service.delete_template(template_id):
        raise HTTPException(status_code=404, detail="Label template not found")
    return MessageResponse(message="Label template deleted")

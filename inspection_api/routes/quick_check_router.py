from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException

from inspection_api.core.logger import get_logger
from inspection_api.core.session import SessionContext
from inspection_api.models.quick_check import DraftRequest, QuickCheckSubmission, StatusUpdate
from inspection_api.models.response import IdResponse, MessageResponse
from inspection_api.routes.dependencies import require_user
from inspection_api.services import quick_check_service

quick_check_router = APIRouter(prefix="/quick-checks", tags=["Quick Checks"])
logger = get_logger(__name__)


@quick_check_router.post("", status_code=201)
async def submit(payload: QuickCheckSubmission, session: SessionContext = Depends(require_user)):
    form = payload.model_dump(exclude_none=True)
    form.setdefault("user", session.user_id)
    form.setdefault("user_email", session.email)
    form.setdefault("user_name", session.name)
    return await quick_check_service.submit_quick_check(form)


@quick_check_router.get("", response_model=List[Dict[str, Any]])
async def history(session: SessionContext = Depends(require_user)):
    return await quick_check_service.get_quick_check_history()


@quick_check_router.get("/active", response_model=List[Dict[str, Any]])
async def active(session: SessionContext = Depends(require_user)):
    return await quick_check_service.get_active_quick_checks()


@quick_check_router.get("/submitted", response_model=List[Dict[str, Any]])
async def submitted(session: SessionContext = Depends(require_user)):
    return await quick_check_service.get_submitted_quick_checks()


# -------------------------------------------------------------------
# Drafts
# -------------------------------------------------------------------
@quick_check_router.get("/drafts", response_model=List[Dict[str, Any]])
async def list_drafts(user: Optional[str] = None, session: SessionContext = Depends(require_user)):
    return await quick_check_service.get_drafts(user)


@quick_check_router.post("/drafts", response_model=IdResponse, status_code=201)
async def create_draft(payload: DraftRequest, session: SessionContext = Depends(require_user)):
    data = {"user": session.user_id, **payload.data}
    return IdResponse(id=await quick_check_service.create_draft(payload.title, data))


@quick_check_router.put("/drafts/{draft_id}", response_model=MessageResponse)
async def update_draft(draft_id: str, payload: DraftRequest, session: SessionContext = Depends(require_user)):
    await quick_check_service.update_draft(draft_id, payload.title, payload.data)
    return MessageResponse(message="Draft updated")


@quick_check_router.delete("/drafts", response_model=MessageResponse)
async def delete_drafts(user: Optional[str] = None, session: SessionContext = Depends(require_user)):
    deleted = await quick_check_service.delete_all_drafts(user)
    return MessageResponse(message=f"Deleted {deleted} drafts")

# -------------------------------------------------------------------
# Single quick checks
# -------------------------------------------------------------------
@quick_check_router.patch("/{check_id}/status", response_model=MessageResponse)
async def update_status(check_id: str, payload: StatusUpdate, session: SessionContext = Depends(require_user)):
    await quick_check_service.update_quick_check_status(check_id, payload.status)
    return MessageResponse(message=f"Status set to {payload.status}")


@quick_check_router.delete("/{check_id}", response_model=MessageResponse)
async def delete(check_id: str, session: SessionContext = Depends(require_user)):
    if not await quick_check_service.delete_quick_check(check_id):
        raise HTTPException(status_code=404, detail="Quick check not found")
    return MessageResponse(message="Quick check deleted")


from typing import Any, Dict, List
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from inspection_api.core.session import SessionContext
from inspection_api.models.cash import (
    BankDepositInput, CashAmountResponse, CashAnalytics, CashOutRequest, CashTotalRequest,
    DrawerCountInput, DrawerSettingsInput,
)
from inspection_api.models.response import MessageResponse
from inspection_api.routes.dependencies import require_admin, require_user
from inspection_api.services import cash_service

cash_router = APIRouter(prefix="/cash", tags=["Cash Management"])

# -------------------------------------------------------------------
# Bank deposits
# -------------------------------------------------------------------
@cash_router.post("/deposits", status_code=201)
async def submit_deposit(payload: BankDepositInput, session: SessionContext = Depends(require_user)):
    return await cash_service.submit_bank_deposit(payload.model_dump(), session)


@cash_router.get("/deposits", response_model=List[Dict[str, Any]])
async def list_deposits(session: SessionContext = Depends(require_user)):
    return await cash_service.get_bank_deposits()


@cash_router.post("/deposits/images", response_model=List[str])
async def upload_deposit_images(files: List[UploadFile] = File(...), session: SessionContext = Depends(require_user)):
    payload = [(await f.read(), f.filename or "image", f.content_type) for f in files]
    return await cash_service.upload_deposit_images(payload)


@cash_router.delete("/deposits/{deposit_id}", response_model=MessageResponse)
async def delete_deposit(deposit_id: str, session: SessionContext = Depends(require_admin)):
    if not await cash_service.delete_bank_deposit(deposit_id):
        raise HTTPException(status_code=404, detail="Bank deposit not found")
    return MessageResponse(message="Bank deposit deleted")

# -------------------------------------------------------------------
# Drawer counts
# -------------------------------------------------------------------
@cash_router.post("/drawer-counts", status_code=201)
async def submit_drawer_count(payload: DrawerCountInput, session: SessionContext = Depends(require_user)):
    return await cash_service.submit_drawer_count(payload.model_dump(), session)


@cash_router.get("/drawer-counts", response_model=List[Dict[str, Any]])
async def list_drawer_counts(session: SessionContext = Depends(require_user)):
    return await cash_service.get_drawer_counts()


@cash_router.put("/drawer-counts/{count_id}", response_model=MessageResponse)
async def update_drawer_count(count_id: str, payload: Dict[str, Any], session: SessionContext = Depends(require_user)):
    await cash_service.update_drawer_count(count_id, payload)
    return MessageResponse(message="Drawer count updated")


@cash_router.delete("/drawer-counts/{count_id}", response_model=MessageResponse)
async def delete_drawer_count(count_id: str, session: SessionContext = Depends(require_admin)):
    if not await cash_service.delete_drawer_count(count_id):
        raise HTTPException(status_code=404, detail="Drawer count not found")
    return MessageResponse(message="Drawer count deleted")

# -------------------------------------------------------------------
# Drawer settings
# -------------------------------------------------------------------
@cash_router.get("/drawer-settings", response_model=List[Dict[str, Any]])
async def list_drawer_settings(session: SessionContext = Depends(require_user)):
    return await cash_service.get_drawer_settings()


@cash_router.post("/drawer-settings", status_code=201)
async def create_drawer_settings(payload: DrawerSettingsInput, session: SessionContext = Depends(require_admin)):
    return await cash_service.create_drawer_settings(payload.model_dump(exclude_none=True))


@cash_router.put("/drawer-settings/{settings_id}", response_model=MessageResponse)
async def update_drawer_settings(settings_id: str, payload: Dict[str, Any],
                                 session: SessionContext = Depends(require_admin)):
    await cash_service.update_drawer_settings(settings_id, payload)
    return MessageResponse(message="Drawer settings updated")


@cash_router.delete("/drawer-settings/{settings_id}", response_model=MessageResponse)
async def delete_drawer_settings(settings_id: str, session: SessionContext = Depends(require_admin)):
    if not await cash_service.delete_drawer_settings(settings_id):
        raise HTTPException(status_code=404, detail="Drawer settings not found")
    return MessageResponse(message="Drawer settings deleted")

# -------------------------------------------------------------------
# Calculations & analytics
# -------------------------------------------------------------------
@cash_router.post("/total", response_model=CashAmountResponse)
async def total_cash(payload: CashTotalRequest):
    return CashAmountResponse(amount=cash_service.calculate_total_cash(c.model_dump() for c in payload.counts))


@cash_router.post("/cash-out", response_model=CashAmountResponse)
async def cash_out(payload: CashOutRequest):
    return CashAmountResponse(amount=cash_service.calculate_cash_out(payload.start, payload.end))


@cash_router.get("/analytics", response_model=CashAnalytics)
async def analytics(session: SessionContext = Depends(require_admin)):
    return await cash_service.get_cash_analytics()

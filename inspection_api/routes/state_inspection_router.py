from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException

from inspection_api.core.session import SessionContext
from inspection_api.models.response import MessageResponse
from inspection_api.models.state_inspection import (
    FleetAccountInput, StateInspectionInput, StateInspectionStats,
)
from inspection_api.routes.dependencies import require_user
from inspection_api.services import state_inspection_service

state_inspection_router = APIRouter(prefix="/state-inspections", tags=["State Inspections"])


@state_inspection_router.get("", response_model=List[Dict[str, Any]])
async def list_records(session: SessionContext = Depends(require_user)):
    return await state_inspection_service.get_records()


@state_inspection_router.get("/stats", response_model=StateInspectionStats)
async def stats(session: SessionContext = Depends(require_user)):
    return await state_inspection_service.get_stats()


@state_inspection_router.post("", status_code=201)
async def create_record(payload: StateInspectionInput, session: SessionContext = Depends(require_user)):
    data = payload.model_dump()
    data.setdefault("created_by", session.user_id)
    return await state_inspection_service.create_record(data)

# -------------------------------------------------------------------
# Fleet accounts
# -------------------------------------------------------------------
@state_inspection_router.get("/fleet-accounts", response_model=List[Dict[str, Any]])
async def list_fleet_accounts(session: SessionContext = Depends(require_user)):
    return await state_inspection_service.get_fleet_accounts()


@state_inspection_router.post("/fleet-accounts", status_code=201)
async def create_fleet_account(payload: FleetAccountInput, session: SessionContext = Depends(require_user)):
    if not payload.name:
        raise HTTPException(status_code=422, detail="Fleet account name is required")
    return await state_inspection_service.create_fleet_account(payload.model_dump())


@state_inspection_router.put("/fleet-accounts/{account_id}")
async def update_fleet_account(account_id: str, payload: FleetAccountInput,
                               session: SessionContext = Depends(require_user)):
    return await state_inspection_service.update_fleet_account(account_id, payload.model_dump())


@state_inspection_router.delete("/fleet-accounts/{account_id}", response_model=MessageResponse)
async def delete_fleet_account(account_id: str, session: SessionContext = Depends(require_user)):
    if not await state_inspection_service.delete_fleet_account(account_id):
        raise HTTPException(status_code=404, detail="Fleet account not found")
    return MessageResponse(message="Fleet account deleted")

# -------------------------------------------------------------------
# Single records (after the fixed paths so they don't swallow them)
# -------------------------------------------------------------------
@state_inspection_router.get("/{record_id}")
async def get_record(record_id: str, session: SessionContext = Depends(require_user)):
    return await state_inspection_service.get_record(record_id)


@state_inspection_router.put("/{record_id}")
async def update_record(record_id: str, payload: StateInspectionInput,
                        session: SessionContext = Depends(require_user)):
    return await state_inspection_service.update_record(record_id, payload.model_dump())


@state_inspection_router.delete("/{record_id}", response_model=MessageResponse)
async def delete_record(record_id: str, session: SessionContext = Depends(require_user)):
    if not await state_inspection_service.delete_record(record_id):
        raise HTTPException(status_code=404, detail="State inspection not found")
    return MessageResponse(message="State inspection deleted")

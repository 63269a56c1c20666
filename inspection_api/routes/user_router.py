from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException

from inspection_api.core.session import SessionContext
from inspection_api.models.response import MessageResponse
from inspection_api.models.user import ProfileUpdate, RoleUpdate
from inspection_api.routes.dependencies import require_admin, require_user
from inspection_api.services import user_service

user_router = APIRouter(prefix="/users", tags=["Users"])


@user_router.get("", response_model=List[Dict[str, Any]])
async def list_users(session: SessionContext = Depends(require_admin)):
    return await user_service.get_users()


@user_router.get("/me")
async def my_profile(session: SessionContext = Depends(require_user)):
    profile = await user_service.get_user_profile(session=session)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@user_router.put("/me", response_model=MessageResponse)
async def update_my_profile(payload: ProfileUpdate, session: SessionContext = Depends(require_user)):
    # role and disabled are admin-only fields
    data = payload.model_dump(exclude_none=True, exclude={"role", "disabled"})
    data["user_id"] = session.user_id
    await user_service.update_profile(data)
    return MessageResponse(message="Profile updated")


@user_router.get("/by-pin/{pin}")
async def lookup_by_pin(pin: str, session: SessionContext = Depends(require_user)):
    user = await user_service.lookup_user_by_pin(pin)
    if user is None:
        raise HTTPException(status_code=404, detail="No user with that PIN")
    return user


@user_router.get("/{user_id}")
async def get_profile(user_id: str, session: SessionContext = Depends(require_admin)):
    profile = await user_service.get_user_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@user_router.patch("/{user_id}/role", response_model=MessageResponse)
async def update_role(user_id: str, payload: RoleUpdate, session: SessionContext = Depends(require_admin)):
    await user_service.update_user_role(user_id, payload.role)
    return MessageResponse(message=f"Role set to {payload.role}")


@user_router.post("/{user_id}/enable", response_model=MessageResponse)
async def enable(user_id: str, session: SessionContext = Depends(require_admin)):
    await user_service.enable_user(user_id)
    return MessageResponse(message="User enabled")


@user_router.post("/{user_id}/disable", response_model=MessageResponse)
async def disable(user_id: str, session: SessionContext = Depends(require_admin)):
    await user_service.disable_user(user_id)
    return MessageResponse(message="User disabled")


@user_router.delete("/{user_id}", response_model=MessageResponse)
async def delete(user_id: str, session: SessionContext = Depends(require_admin)):
    if not await user_service.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return MessageResponse(message="User deleted")

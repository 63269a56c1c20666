from typing import Optional
from fastapi import Depends, Header, HTTPException

from inspection_api.core.session import SessionContext
from inspection_api.services.auth_service import resolve_session


async def get_session(authorization: Optional[str] = Header(None)) -> SessionContext:
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[len("bearer "):].strip() or None
    return await resolve_session(SessionContext(token))


async def require_user(session: SessionContext = Depends(get_session)) -> SessionContext:
    await session.wait_ready()
    if not session.is_authenticated:
        raise HTTPException(status_code=401, detail="Not authenticated")
    if session.disabled:
        raise HTTPException(status_code=403, detail="User account is disabled")
    return session


async def require_admin(session: SessionContext = Depends(require_user)) -> SessionContext:
    if session.role != "admin":
        raise HTTPException(status_code=403, detail="Admin role required")
    return session

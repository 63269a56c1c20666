from fastapi import APIRouter, Depends
from inspection_api.core.logger import get_logger
from inspection_api.core.session import SessionContext
from inspection_api.models.auth import (
    LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, SessionResponse,
)
from inspection_api.routes.dependencies import get_session
from inspection_api.services import auth_service

auth_router = APIRouter(prefix="/auth", tags=["Auth"])
logger = get_logger(__name__)


@auth_router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest):
    logger.info(f"Login attempt for {payload.email}")
    return await auth_service.login(payload.email, payload.password)


@auth_router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(payload: RegisterRequest):
    return await auth_service.register(payload.email, payload.password, payload.name, payload.pin)


@auth_router.get("/me", response_model=SessionResponse)
async def me(session: SessionContext = Depends(get_session)):
    await session.wait_ready()
    return SessionResponse(
        authenticated=session.is_authenticated,
        user_id=session.user_id,
        email=session.email,
        name=session.name,
        role=session.role,
    )

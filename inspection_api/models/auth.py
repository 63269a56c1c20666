from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from inspection_api.models.base import CamelModel


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    token: str
    email: str
    name: str
    role: str
    user_id: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str
    pin: str = Field(..., min_length=4, max_length=8)


class RegisterResponse(CamelModel):
    user_id: str
    email: str
    name: str
    role: str


class SessionResponse(CamelModel):
    authenticated: bool
    user_id: Optional[str] = None
    email: Optional[str] = None
    name: str
    role: str

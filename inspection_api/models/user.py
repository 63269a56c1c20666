from typing import Optional
from pydantic import BaseModel

from inspection_api.models.base import DocumentInput


class RoleUpdate(BaseModel):
    role: str


class ProfileUpdate(DocumentInput):
    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    pin: Optional[str] = None

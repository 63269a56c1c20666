from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from inspection_api.models.base import DocumentInput


class QuickCheckSubmission(DocumentInput):
    title: Optional[str] = None
    user: Optional[str] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    inspection_type: Optional[str] = None
    vin: Optional[str] = None
    # JSON-encoded form body, as the inspection forms post it
    data: Optional[str] = None


class StatusUpdate(BaseModel):
    status: str


class DraftRequest(BaseModel):
    title: str
    data: Dict[str, Any] = Field(default_factory=dict)

from typing import Optional
from pydantic import BaseModel

from inspection_api.models.base import DocumentInput


class StateInspectionInput(DocumentInput):
    vin: Optional[str] = None
    status: Optional[str] = None
    fleet_account_id: Optional[str] = None


class FleetAccountInput(DocumentInput):
    name: Optional[str] = None


class StateInspectionStats(BaseModel):
    total: int
    passed: int
    failed: int

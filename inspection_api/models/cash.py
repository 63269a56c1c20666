from typing import List, Optional
from pydantic import BaseModel

from inspection_api.models.base import CamelModel, DocumentInput


class DenominationCount(BaseModel):
    value: float = 0
    count: float = 0


class BankDepositInput(DocumentInput):
    amount: float = 0
    images: List[str] = []


class DrawerCountInput(DocumentInput):
    drawer_name: Optional[str] = None
    counts: List[DenominationCount] = []
    variance: float = 0


class DrawerSettingsInput(DocumentInput):
    name: Optional[str] = None
    target_denominations: Optional[dict] = None


class CashTotalRequest(BaseModel):
    counts: List[DenominationCount]


class CashOutRequest(BaseModel):
    start: float
    end: float


class CashAmountResponse(BaseModel):
    amount: float


class CashAnalytics(CamelModel):
    total_deposits: float = 0
    total_drawer_counts: int = 0
    total_variance: float = 0
    average_deposit: float = 0

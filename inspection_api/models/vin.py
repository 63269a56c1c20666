from typing import Optional
from pydantic import BaseModel, Field

from inspection_api.models.base import CamelModel


class DecodeVinRequest(BaseModel):
    vin: Optional[str] = Field(None, description="17-character Vehicle Identification Number to decode")


class VinValidationResponse(BaseModel):
    vin: str
    valid: bool


class DecodedVehicleDetails(CamelModel):
    """Either the decoded vehicle fields or a lone error message, never both."""

    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[str] = None
    engine: Optional[str] = None
    engine_l: Optional[str] = None
    engine_cylinders: Optional[str] = None
    trim: Optional[str] = None
    body_type: Optional[str] = None
    body_class: Optional[str] = None
    drive_type: Optional[str] = None
    transmission: Optional[str] = None
    fuel_type: Optional[str] = None
    manufacturer: Optional[str] = None
    plant: Optional[str] = None
    vehicle_type: Optional[str] = None
    error: Optional[str] = None

from fastapi import APIRouter
from inspection_api.core.logger import get_logger
from inspection_api.models.vin import DecodeVinRequest, DecodedVehicleDetails, VinValidationResponse
from inspection_api.services.vin_decoder import decode_vin, normalize_vin, validate_vin

vin_router = APIRouter(prefix="/vin", tags=["Vehicle"])
logger = get_logger(__name__)

@vin_router.post("/decode", response_model=DecodedVehicleDetails, response_model_exclude_none=True)
async def decode(request: DecodeVinRequest):
    """
    Decode a VIN through NHTSA. Failures are reported in the `error` field, not as HTTP errors.
    """
    return await decode_vin(request.vin)


@vin_router.get("/{vin}/validate", response_model=VinValidationResponse)
async def validate(vin: str):
    return VinValidationResponse(vin=normalize_vin(vin), valid=validate_vin(vin))

"""
VIN normalization, validation and decoding against the NHTSA vPIC API.

``decode_vin`` is total: every failure (bad input, transport error, odd
payload) comes back as a ``DecodedVehicleDetails`` carrying only ``error``.
"""
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Dict, List, Optional

import httpx

from inspection_api.core.config import settings
from inspection_api.core.logger import get_logger
from inspection_api.models.vin import DecodedVehicleDetails

logger = get_logger(__name__)

VIN_LENGTH = 17
VIN_PATTERN = re.compile(r"[A-HJ-NPR-Z0-9]{17}")
DECIMAL_PATTERN = re.compile(r"[0-9]+\.[0-9]+")
ONE_PLACE = Decimal("0.1")
# wide enough for the integer part of any float
FLOAT_CONTEXT = Context(prec=400)
WHITESPACE = re.compile(r"\s")

EMPTY_VALUES = ("Not Applicable", "0")

INVALID_LENGTH_MESSAGE = "Invalid VIN length. VIN must be 17 characters."
INVALID_FORMAT_MESSAGE = "Invalid VIN format. VIN contains invalid characters."
NO_DATA_MESSAGE = "No vehicle data found for this VIN"
DEFAULT_ERROR_MESSAGE = "Failed to decode VIN"

# vPIC "Variable" name -> output field. Body Class feeds two fields.
FIELD_MAP = {
    "make": "Make",
    "model": "Model",
    "year": "Model Year",
    "engine": "Engine Configuration",
    "engine_l": "Displacement (L)",
    "engine_cylinders": "Engine Number of Cylinders",
    "trim": "Trim",
    "body_type": "Body Class",
    "body_class": "Body Class",
    "drive_type": "Drive Type",
    "transmission": "Transmission Style",
    "fuel_type": "Fuel Type - Primary",
    "manufacturer": "Manufacturer Name",
    "plant": "Plant Company Name",
    "vehicle_type": "Vehicle Type",
}


class VinDecodeError(Exception):
    pass


def normalize_vin(vin: str) -> str:
    return WHITESPACE.sub("", vin).upper()


def validate_vin(vin: Optional[str]) -> bool:
    if not vin:
        return False
    return VIN_PATTERN.fullmatch(normalize_vin(vin)) is not None


def truncate_decimal_value(value: str) -> str:
    """
    Trim decimal strings to one fractional digit: "3.60" -> "3.6", "6.0" -> "6".
    Anything that is not plain digits.digits is returned untouched.
    """
    if not value:
        return ""
    if not DECIMAL_PATTERN.fullmatch(value):
        return value
    # ties round up on the exact binary value: "0.25" -> "0.3", "1.15" -> "1.1"
    text = str(Decimal(float(value)).quantize(ONE_PLACE, rounding=ROUND_HALF_UP, context=FLOAT_CONTEXT))
    return text[:-2] if text.endswith(".0") else text


def extract_value(results: List[Dict[str, Any]], variable: str) -> str:
    found = next((item for item in results if item.get("Variable") == variable), None)
    raw_value = found.get("Value") if found else None
    if not raw_value or raw_value in EMPTY_VALUES:
        return ""
    return truncate_decimal_value(str(raw_value))


async def fetch_decode_results(vin: str, client: Optional[httpx.AsyncClient] = None) -> List[Dict[str, Any]]:
    url = f"{settings.VIN_DECODE_URL}/{vin}"
    logger.info(f"Calling NHTSA API for VIN: {vin}")

    try:
        if client is None:
            async with httpx.AsyncClient() as session:
                response = await session.get(url, params={"format": "json"})
        else:
            response = await client.get(url, params={"format": "json"})
    except httpx.RequestError as e:
        raise VinDecodeError(f"VIN decode request failed: {str(e) or type(e).__name__}") from e

    if not response.is_success:
        raise VinDecodeError(f"VIN decode request failed: {response.status_code}")

    data = response.json()
    return data.get("Results") or []


async def decode_vin(vin: Optional[str], client: Optional[httpx.AsyncClient] = None) -> DecodedVehicleDetails:
    try:
        if not vin or len(vin) != VIN_LENGTH:
            raise VinDecodeError(INVALID_LENGTH_MESSAGE)

        clean_vin = normalize_vin(vin)
        if not VIN_PATTERN.fullmatch(clean_vin):
            raise VinDecodeError(INVALID_FORMAT_MESSAGE)

        results = await fetch_decode_results(clean_vin, client)
        if not results:
            raise VinDecodeError(NO_DATA_MESSAGE)

        fields = {name: extract_value(results, variable) for name, variable in FIELD_MAP.items()}
        logger.info(f"Decoded VIN {clean_vin}: {fields['year']} {fields['make']} {fields['model']}")
        return DecodedVehicleDetails(**fields)

    except Exception as e:
        logger.error(f"VIN decode error: {e}")
        return DecodedVehicleDetails(error=str(e) or DEFAULT_ERROR_MESSAGE)


def format_vehicle_details(details: Optional[DecodedVehicleDetails]) -> str:
    if details is None:
        return ""
    return f"{details.year or ''} {details.make or ''} {details.model or ''}".strip()

"""Request input checks performed before the codec is called."""

import json
import math
from typing import Any, Dict, List, Optional

from .errors import ApiError

MISSING = object()


def json_type_name(value: Any) -> str:
    """Name of a decoded JSON value's type, as a client would describe it."""
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    if value is None:
        return 'null'
    return 'object'


def parse_json_object(raw: bytes) -> Dict[str, Any]:
    """
    Decode a request body into a dict.

    An empty body counts as an empty object so that the per-field checks
    report which field is missing.

    Raises:
        ApiError: INVALID_JSON_SYNTAX for malformed JSON,
            INVALID_JSON_BODY for JSON that is not an object
    """
    if not raw.strip():
        return {}

    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ApiError(
            400, 'INVALID_JSON_SYNTAX', f"Invalid JSON payload: {e}",
            details='Ensure your JSON is properly formatted with correct syntax'
        )

    if not isinstance(payload, dict):
        raise ApiError(
            400, 'INVALID_JSON_BODY',
            f"Invalid JSON payload: expected an object, received {json_type_name(payload)}"
        )
    return payload


def coerce_number(value: Any) -> Optional[float]:
    """
    Interpret a JSON or query value as a finite number.

    Numbers and numeric strings are accepted; booleans, NaN, infinities and
    everything else are not.

    Returns:
        The float value, or None if it is not a valid number
    """
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None

    try:
        number = float(value)
    except (ValueError, OverflowError):
        # OverflowError: JSON integers beyond the float range
        return None

    return number if math.isfinite(number) else None


def single_query_value(values: List[str]) -> Any:
    """Collapse repeated query parameters the way a JSON body would hold them."""
    if not values:
        return MISSING
    if len(values) == 1:
        return values[0]
    return values


def require_coordinates(latitude: Any, longitude: Any) -> tuple:
    """Validate both axes after presence checks; returns (lat, lon) floats."""
    lat = coerce_number(latitude)
    if lat is None:
        raise ApiError(400, 'INVALID_LATITUDE', 'Invalid latitude: must be a valid number')

    lon = coerce_number(longitude)
    if lon is None:
        raise ApiError(400, 'INVALID_LONGITUDE', 'Invalid longitude: must be a valid number')

    return lat, lon


def require_code_string(digipin: Any) -> str:
    """Type and blank checks for a code after the presence check."""
    if not isinstance(digipin, str):
        received = json_type_name(digipin)
        raise ApiError(
            400, 'INVALID_DIGIPIN_TYPE',
            f"Invalid digipin type: expected string, received {received}",
            receivedType=received
        )

    if not digipin.strip():
        raise ApiError(400, 'INVALID_DIGIPIN', 'Invalid digipin: must be a non-empty string')

    return digipin

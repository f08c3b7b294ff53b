"""DIGIPIN encode/decode routes.

Each handler validates its input, calls the codec's non-raising entry point
and turns the outcome into a response. No codec logic lives here.
"""

from typing import Any, Dict

from fastapi import APIRouter, Request

from ..abstractions.types import Failure
from ..grid_systems import try_encode, try_decode
from ..infrastructure.logging import get_logger
from .errors import ApiError, failure_to_api_error
from .schemas import (
    DecodeRequest, DecodeResponse, EncodeRequest, EncodeResponse,
    ErrorResponse, request_body_schema
)
from .validation import (
    MISSING, parse_json_object, require_code_string, require_coordinates,
    single_query_value
)

logger = get_logger(__name__)

ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {'model': ErrorResponse},
    415: {'model': ErrorResponse},
}


def _encode(latitude: Any, longitude: Any) -> Dict[str, str]:
    lat, lon = require_coordinates(latitude, longitude)

    outcome = try_encode(lat, lon)
    if isinstance(outcome, Failure):
        raise failure_to_api_error(outcome)

    logger.debug(f"Encoded ({lat}, {lon}) -> {outcome.value}")
    return {'digipin': outcome.value}


def _decode(request: Request, digipin: Any) -> Dict[str, Any]:
    code = require_code_string(digipin)

    outcome = try_decode(code)
    if isinstance(outcome, Failure):
        raise failure_to_api_error(outcome)

    precision = request.app.state.settings.get('output.coordinate_precision', 6)
    return outcome.value.to_dict(precision=precision)


def create_router() -> APIRouter:
    """Build the router; mounted under the configured API prefix."""
    router = APIRouter(tags=['digipin'])

    @router.post('/encode', response_model=EncodeResponse, responses=ERROR_RESPONSES,
                 openapi_extra=request_body_schema(EncodeRequest),
                 summary='Encode latitude and longitude into a DIGIPIN')
    async def encode_post(request: Request):
        body = parse_json_object(await request.body())
        latitude = body.get('latitude')
        longitude = body.get('longitude')

        if latitude is None:
            raise ApiError(400, 'MISSING_LATITUDE', 'Missing required field: latitude')
        if longitude is None:
            raise ApiError(400, 'MISSING_LONGITUDE', 'Missing required field: longitude')

        return _encode(latitude, longitude)

    @router.get('/encode', response_model=EncodeResponse, responses=ERROR_RESPONSES,
                summary='Encode latitude and longitude (query parameters) into a DIGIPIN')
    async def encode_get(request: Request):
        params = request.query_params
        latitude = single_query_value(params.getlist('latitude'))
        longitude = single_query_value(params.getlist('longitude'))

        if latitude in (MISSING, '') or longitude in (MISSING, ''):
            raise ApiError(400, 'MISSING_PARAMETERS',
                           'Missing required query parameters: latitude and longitude')

        return _encode(latitude, longitude)

    @router.post('/decode', response_model=DecodeResponse, responses=ERROR_RESPONSES,
                 openapi_extra=request_body_schema(DecodeRequest),
                 summary='Decode a DIGIPIN into coordinates')
    async def decode_post(request: Request):
        body = parse_json_object(await request.body())
        digipin = body.get('digipin')

        if digipin is None:
            raise ApiError(400, 'MISSING_DIGIPIN', 'Missing required field: digipin')

        return _decode(request, digipin)

    @router.get('/decode', response_model=DecodeResponse, responses=ERROR_RESPONSES,
                summary='Decode a DIGIPIN (query parameter) into coordinates')
    async def decode_get(request: Request):
        digipin = single_query_value(request.query_params.getlist('digipin'))

        if digipin in (MISSING, ''):
            raise ApiError(400, 'MISSING_DIGIPIN', 'Missing required query parameter: digipin')

        return _decode(request, digipin)

    return router

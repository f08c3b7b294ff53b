"""Pydantic DTOs for the HTTP service (documentation and response shaping)."""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class EncodeRequest(BaseModel):
    """Body of ``POST /encode``. Numeric strings are accepted too."""
    latitude: Union[float, str] = Field(..., examples=[28.6139])
    longitude: Union[float, str] = Field(..., examples=[77.2090])


class DecodeRequest(BaseModel):
    """Body of ``POST /decode``."""
    digipin: str = Field(..., examples=["39J-438-TJC7"])


class EncodeResponse(BaseModel):
    digipin: str = Field(..., examples=["39J-438-TJC7"])


class BoundsModel(BaseModel):
    """Final cell of a decoded code."""
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float


class DecodeResponse(BaseModel):
    """Cell midpoint as fixed-precision strings plus the numeric cell bounds."""
    latitude: str = Field(..., examples=["28.613901"])
    longitude: str = Field(..., examples=["77.208998"])
    bounds: BoundsModel


class ErrorResponse(BaseModel):
    """Error body shared by every failure response."""
    model_config = ConfigDict(extra='allow')

    error: str
    code: str
    details: Optional[Union[str, Dict[str, Any]]] = None


def request_body_schema(model: type) -> Dict[str, Any]:
    """OpenAPI ``requestBody`` for routes that read the raw body themselves."""
    return {
        'requestBody': {
            'required': True,
            'content': {
                'application/json': {'schema': model.model_json_schema()}
            }
        }
    }

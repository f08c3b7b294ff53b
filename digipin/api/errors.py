"""Error shaping for the HTTP service.

Every failure leaves the service as ``{"error": message, "code": CODE, ...}``.
Core failure kinds are mapped here and only here; each kind keeps its own
code so clients can tell them apart.
"""

from typing import Any, Dict, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..abstractions.types import Failure
from ..grid_systems import ErrorKind
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Raised by route handlers to produce an error response."""

    def __init__(self, status_code: int, code: str, message: str, **extra: Any):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        return {'error': self.message, 'code': self.code, **self.extra}


# ErrorKind -> (status, code). Out-of-range coordinates are split per axis.
CORE_ERROR_CODES: Dict[ErrorKind, Tuple[int, str]] = {
    ErrorKind.COORDINATE_OUT_OF_RANGE: (400, 'COORDINATE_OUT_OF_RANGE'),
    ErrorKind.INVALID_CODE_LENGTH: (400, 'INVALID_DIGIPIN_LENGTH'),
    ErrorKind.INVALID_CODE_SYMBOL: (400, 'INVALID_DIGIPIN_CHARACTER'),
}

AXIS_ERROR_CODES = {
    'latitude': 'LATITUDE_OUT_OF_RANGE',
    'longitude': 'LONGITUDE_OUT_OF_RANGE',
}

HTTP_ERROR_CODES = {
    404: 'NOT_FOUND',
    405: 'METHOD_NOT_ALLOWED',
}


def failure_to_api_error(failure: Failure) -> ApiError:
    """Translate a core ``Failure`` into the response it should produce."""
    status_code, code = CORE_ERROR_CODES[failure.kind]
    details = dict(failure.error.details)

    if failure.kind is ErrorKind.COORDINATE_OUT_OF_RANGE:
        code = AXIS_ERROR_CODES.get(details.get('axis'), code)

    return ApiError(status_code, code, failure.message, details=details)


def error_response(error: ApiError, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict(), headers=headers)


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.info(
        f"Rejected request: {exc.code}",
        extra={'context': {'status_code': exc.status_code, 'error_code': exc.code}}
    )
    return error_response(exc)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = HTTP_ERROR_CODES.get(exc.status_code, 'HTTP_ERROR')
    return error_response(
        ApiError(exc.status_code, code, str(exc.detail)),
        headers=getattr(exc, 'headers', None)
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        ApiError(400, 'INVALID_REQUEST', 'Request validation failed', details=str(exc.errors()))
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.log_error_with_context(exc, operation=f"{request.method} {request.url.path}")
    return error_response(ApiError(500, 'INTERNAL_ERROR', 'Internal server error'))


def register_error_handlers(app: FastAPI):
    """Attach the service's exception handlers to an app."""
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

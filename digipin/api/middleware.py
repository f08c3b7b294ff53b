"""HTTP middleware: JSON content-type enforcement and access logging."""

import time

from fastapi import FastAPI, Request

from ..infrastructure.logging import get_logger, request_scope
from .errors import ApiError, error_response

logger = get_logger('digipin.api.access')

BODY_METHODS = ('POST', 'PUT', 'PATCH')
REQUEST_ID_HEADER = 'X-Request-ID'


def add_content_type_check(app: FastAPI):
    """Reject body-carrying requests that are not declared as JSON (415)."""

    @app.middleware('http')
    async def require_json_content_type(request: Request, call_next):
        if request.method in BODY_METHODS:
            content_type = request.headers.get('content-type')
            if not content_type or 'application/json' not in content_type.lower():
                return error_response(ApiError(
                    415, 'INVALID_CONTENT_TYPE',
                    'Unsupported Media Type: Content-Type must be application/json',
                    receivedContentType=content_type or 'none',
                    expectedContentType='application/json'
                ))
        return await call_next(request)


def add_access_log(app: FastAPI):
    """Log one line per request with status and duration, tagged with a request id."""

    @app.middleware('http')
    async def access_log(request: Request, call_next):
        route = f"{request.method} {request.url.path}"
        with request_scope(route, request.headers.get(REQUEST_ID_HEADER)) as request_id:
            start = time.perf_counter()
            response = await call_next(request)
            duration = time.perf_counter() - start

            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                f"{route} {response.status_code} {duration * 1000:.1f}ms",
                extra={'performance': {
                    'operation': 'http_request',
                    'duration_seconds': round(duration, 3),
                    'status_code': response.status_code
                }}
            )
            return response

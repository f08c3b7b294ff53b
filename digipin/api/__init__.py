"""HTTP adapter: request parsing, error shaping and API docs around the codec."""

from .app import create_app
from .errors import ApiError, CORE_ERROR_CODES, failure_to_api_error

__all__ = ['create_app', 'ApiError', 'CORE_ERROR_CODES', 'failure_to_api_error']

"""Logging context management for request and command correlation."""

from contextlib import contextmanager
from typing import Optional
import uuid

from .structured_logger import (
    StructuredLogger, request_context, route_context, command_context,
    get_logger
)


@contextmanager
def request_scope(route: str, request_id: Optional[str] = None):
    """Bind a request id and route to every log record emitted in scope.

    Args:
        route: Route or operation name, e.g. ``"POST /api/digipin/encode"``
        request_id: Incoming correlation id (generated if not provided)

    Example:
        with request_scope('GET /encode') as request_id:
            logger.info("Encoding")  # carries request_id and route
    """
    request_id = request_id or uuid.uuid4().hex
    request_token = request_context.set(request_id)
    route_token = route_context.set(route)
    try:
        yield request_id
    finally:
        route_context.reset(route_token)
        request_context.reset(request_token)


@contextmanager
def command_scope(command: str):
    """Bind a CLI command name to every log record emitted in scope."""
    token = command_context.set(command)
    try:
        yield
    finally:
        command_context.reset(token)


@contextmanager
def temporary_context(logger: Optional[StructuredLogger] = None, **fields):
    """Temporarily add context fields to a logger.

    Args:
        logger: Logger to annotate (the 'context' logger if not given)
        **fields: Context fields to add

    Example:
        with temporary_context(logger, input_file='points.csv'):
            logger.info("Processing file")  # Will include input_file
    """
    logger = logger or get_logger('context')
    logger.add_context(**fields)

    try:
        yield
    finally:
        logger.remove_context(*fields.keys())

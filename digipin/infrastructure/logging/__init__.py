"""Structured logging infrastructure for the service and CLI."""

from .structured_logger import StructuredLogger, get_logger
from .context import request_scope, command_scope, temporary_context
from .decorators import log_operation
from .setup import setup_logging, setup_simple_logging, get_log_stats

__all__ = [
    'StructuredLogger',
    'get_logger',
    'request_scope',
    'command_scope',
    'temporary_context',
    'log_operation',
    'setup_logging',
    'setup_simple_logging',
    'get_log_stats'
]

"""Logger subclass that stamps request/command correlation onto every record.

Records leave this logger with three extra attributes that the formatters
read: ``context`` (dict), ``performance`` (dict or None) and ``traceback``
(str or None).
"""

import logging
import sys
import time
import traceback
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

# Set by request_scope / command_scope; visible to every task and thread
# spawned inside the scope.
request_context: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
route_context: ContextVar[Optional[str]] = ContextVar('route', default=None)
command_context: ContextVar[Optional[str]] = ContextVar('command', default=None)

STRUCTURED_KEYS = ('context', 'performance', 'traceback')


def utc_now() -> str:
    """ISO-8601 UTC timestamp with a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def correlation_fields() -> Dict[str, str]:
    """Correlation ids bound in the current scope, unset ones omitted."""
    fields = {
        'request_id': request_context.get(),
        'route': route_context.get(),
        'command': command_context.get(),
    }
    return {key: value for key, value in fields.items() if value is not None}


def _render_traceback(exc_info: Any) -> Optional[str]:
    if isinstance(exc_info, BaseException):
        exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
    elif not isinstance(exc_info, tuple):
        exc_info = sys.exc_info()

    if exc_info[0] is None:
        return None
    return ''.join(traceback.format_exception(*exc_info))


class StructuredLogger(logging.Logger):
    """Logger carrying correlation context, persistent fields and timings.

    Use ``get_logger`` rather than instantiating directly.
    """

    def __init__(self, name: str):
        super().__init__(name)
        self._fields: Dict[str, Any] = {}
        self._timers: Dict[str, float] = {}

    def _log(self, level, msg, args, exc_info=None, extra=None, stack_info=False, **kwargs):
        extra = dict(extra) if isinstance(extra, dict) else {}
        context, performance, tb = self._split_extra(extra)

        if tb is None and exc_info:
            tb = _render_traceback(exc_info)

        extra.update(context=context, performance=performance, traceback=tb)
        # The traceback travels as text; the formatters never see exc_info
        super()._log(level, msg, args, exc_info=None, extra=extra,
                     stack_info=stack_info, **kwargs)

    def _split_extra(self, extra: Dict[str, Any]) -> Tuple[Dict[str, Any], Any, Any]:
        context = {
            'logger_name': self.name,
            'timestamp': utc_now(),
            **correlation_fields(),
            **self._fields,
        }
        context.update(extra.pop('context', None) or {})
        return context, extra.pop('performance', None), extra.pop('traceback', None)

    def add_context(self, **fields):
        """Attach fields to every later record from this logger."""
        self._fields.update(fields)

    def remove_context(self, *keys):
        for key in keys:
            self._fields.pop(key, None)

    def clear_context(self):
        self._fields.clear()

    def start_operation(self, operation: str):
        """Start a named timer; ``end_operation`` logs its duration."""
        self._timers[operation] = time.perf_counter()
        self.debug(f"Started operation: {operation}")

    def end_operation(self, operation: str, **metrics):
        started = self._timers.pop(operation, None)
        if started is None:
            self.warning(f"No start time for operation: {operation}")
            return
        self.log_performance(operation, time.perf_counter() - started, **metrics)

    def log_performance(self, operation: str, duration: float, **metrics):
        """Log an INFO record with a ``performance`` payload.

        Args:
            operation: Operation name, e.g. ``'encode_frame'``
            duration: Elapsed seconds
            **metrics: Extra fields; ``items_processed`` also yields
                ``items_per_second``
        """
        performance = {
            'operation': operation,
            'duration_seconds': round(duration, 3),
            'timestamp': utc_now(),
            **metrics,
        }
        items = metrics.get('items_processed')
        if items is not None and duration > 0:
            performance['items_per_second'] = round(items / duration, 2)

        self.info(f"Performance: {operation} completed in {duration:.3f}s",
                  extra={'performance': performance})

    def log_error_with_context(self, error: Exception, operation: Optional[str] = None, **context):
        """Log ``error`` at ERROR level with its traceback and type in the context."""
        fields = {
            'error_type': type(error).__name__,
            'error_module': type(error).__module__,
            **context,
        }
        if operation:
            fields['operation'] = operation

        self.error(f"{type(error).__name__}: {error}", exc_info=error,
                   extra={'context': fields})

    def create_child(self, suffix: str) -> 'StructuredLogger':
        return get_logger(f"{self.name}.{suffix}")


_loggers: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """Get (or create) the ``StructuredLogger`` for ``name``.

    Example:
        logger = get_logger(__name__)
        logger.info("Encoded", extra={'context': {'rows': 10}})
    """
    if name not in _loggers:
        previous = logging.getLoggerClass()
        logging.setLoggerClass(StructuredLogger)
        try:
            _loggers[name] = logging.getLogger(name)
        finally:
            logging.setLoggerClass(previous)
    return _loggers[name]

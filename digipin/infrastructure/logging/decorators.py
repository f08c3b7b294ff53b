"""``log_operation``: timing and failure logging for batch entry points."""

import functools
import inspect
import time
from typing import Any, Callable, Dict, Optional, TypeVar

from .structured_logger import get_logger

F = TypeVar('F', bound=Callable[..., Any])


def _summarize(value: Any) -> Any:
    """Scalars as-is; arrays and frames as type and length only."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    try:
        return f"<{type(value).__name__} len={len(value)}>"
    except TypeError:
        return f"<{type(value).__name__}>"


def _item_count(result: Any) -> Optional[int]:
    if isinstance(result, (str, bytes)):
        return None
    try:
        return len(result)
    except TypeError:
        return None


def _call_arguments(func: Callable, args: tuple, kwargs: dict) -> Dict[str, Any]:
    bound = inspect.signature(func).bind(*args, **kwargs)
    bound.apply_defaults()
    return {name: _summarize(value) for name, value in bound.arguments.items()}


def log_operation(operation_name: Optional[str] = None,
                  log_args: bool = False,
                  log_result: bool = False,
                  log_performance: bool = True):
    """Log the start, duration and outcome of each call.

    Exceptions are logged with their traceback and re-raised unchanged. When
    the return value has a length (array, DataFrame) it is reported as
    ``items_processed``.

    Args:
        operation_name: Name in the log (the function name if None)
        log_args: Include a summary of the call arguments
        log_result: Include a summary of the return value
        log_performance: Emit a performance record; otherwise a plain
            "Completed" line

    Example:
        @log_operation("encode_frame")
        def encode_frame(df, ...):
            ...
    """
    def decorator(func: F) -> F:
        name = operation_name or func.__name__
        logger = get_logger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            context: Dict[str, Any] = {'operation': name}
            if log_args:
                context['arguments'] = _call_arguments(func, args, kwargs)

            logger.debug(f"Starting {name}", extra={'context': context})
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Failed {name}: {e}",
                    exc_info=True,
                    extra={
                        'context': context,
                        'performance': {
                            'duration_seconds': round(time.perf_counter() - started, 3),
                            'status': 'failed',
                            'error_type': type(e).__name__,
                        },
                    }
                )
                raise

            metrics: Dict[str, Any] = {'status': 'success'}
            count = _item_count(result)
            if count is not None:
                metrics['items_processed'] = count
            if log_result:
                metrics['result'] = _summarize(result)

            if log_performance:
                logger.log_performance(name, time.perf_counter() - started, **metrics)
            else:
                logger.info(f"Completed {name}", extra={'context': {**context, **metrics}})
            return result

        return wrapper  # type: ignore
    return decorator

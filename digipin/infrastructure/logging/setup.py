"""Install the structured handlers on the root logger."""

import logging
import sys
from typing import Any, Dict, Optional

from .handlers import ConsoleHandler, FileHandler
from .structured_logger import get_logger


def _resolve_level(level: Any) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def _replace_root_handlers(level: int) -> logging.Logger:
    """Drop whatever is on the root logger so repeated setup never doubles output."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
    return root


def setup_logging(config,
                  log_file: Optional[str] = None,
                  console: Optional[bool] = None,
                  log_level: Optional[str] = None):
    """Configure logging for the CLI or the service from the ``logging`` section.

    Args:
        config: Config instance (anything with dot-notation ``get``)
        log_file: JSON log file; without it a file is only written when
            ``logging.file_enabled`` is true
        console: Human-readable stderr output (``logging.console`` if None)
        log_level: Root level name (``logging.level`` if None)
    """
    level_name = log_level or config.get('logging.level', 'INFO')
    level = _resolve_level(level_name)
    if console is None:
        console = config.get('logging.console', True)

    root = _replace_root_handlers(level)

    if console:
        console_handler = ConsoleHandler(show_context=config.get('logging.show_context', True))
        console_handler.setLevel(level)
        root.addHandler(console_handler)

    file_handler = None
    if log_file or config.get('logging.file_enabled', False):
        file_handler = FileHandler.from_config(config, filename=log_file)
        root.addHandler(file_handler)

    get_logger(__name__).debug(
        "Logging configured",
        extra={'context': {
            'log_level': logging.getLevelName(level),
            'console': bool(console),
            'log_file': file_handler.baseFilename if file_handler else None,
        }}
    )


def setup_simple_logging(log_level: str = 'INFO'):
    """stderr-only logging, for scripts and debugging sessions."""
    level = _resolve_level(log_level)
    root = _replace_root_handlers(level)

    handler = ConsoleHandler(stream=sys.stderr)
    handler.setLevel(level)
    root.addHandler(handler)


def get_log_stats() -> Dict[str, Any]:
    """Describe the handlers currently installed on the root logger."""
    stats: Dict[str, Any] = {}
    for handler in logging.getLogger().handlers:
        # FileHandler is a StreamHandler too, so test it first
        if isinstance(handler, FileHandler):
            stats['file'] = {
                'filename': handler.baseFilename,
                'max_bytes': handler.maxBytes,
                'backup_count': handler.backupCount,
            }
        elif isinstance(handler, ConsoleHandler):
            stats['console'] = {'level': logging.getLevelName(handler.level)}
    return stats

"""Compact single-line console format for operators."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

LEVEL_COLORS = {
    'DEBUG': '\033[36m',
    'INFO': '',
    'WARNING': '\033[93m',
    'ERROR': '\033[91m',
    'CRITICAL': '\033[95m',
}
DIM = '\033[2m'
RESET = '\033[0m'


class HumanFormatter(logging.Formatter):
    """Render records as ``time LEVEL [logger] [req|route|cmd] message (metrics)``.

    Performance payloads are folded into a trailing parenthesis so that an
    access-log line stays one line; tracebacks follow on their own lines.
    """

    def __init__(self, use_colors: bool = True, show_context: bool = True,
                 name_width: int = 24):
        super().__init__()
        self.use_colors = use_colors
        self.show_context = show_context
        self.name_width = name_width

    def _paint(self, text: str, color: str) -> str:
        if not self.use_colors or not color:
            return text
        return f"{color}{text}{RESET}"

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname, '')
        pieces = [
            self._paint(datetime.fromtimestamp(record.created).strftime('%H:%M:%S'), DIM),
            self._paint(f"{record.levelname:<8}", color),
            self._paint(f"[{self.short_name(record.name)}]", DIM),
        ]

        if self.show_context:
            tags = self.correlation_tags(getattr(record, 'context', None))
            if tags:
                pieces.append(f"[{tags}]")

        pieces.append(record.getMessage())

        metrics = self.metrics_summary(getattr(record, 'performance', None))
        if metrics:
            pieces.append(self._paint(f"({metrics})", DIM))

        line = ' '.join(pieces)

        tb = getattr(record, 'traceback', None)
        if not tb and record.exc_info:
            tb = self.formatException(record.exc_info)
        if tb:
            line += '\n' + '\n'.join(self._paint(f"  {row}", color)
                                     for row in tb.rstrip().splitlines())
        return line

    @staticmethod
    def correlation_tags(context: Optional[Dict[str, Any]]) -> str:
        if not context:
            return ''
        tags: List[str] = []
        if context.get('request_id'):
            tags.append(f"req:{str(context['request_id'])[:8]}")
        if context.get('route'):
            tags.append(f"route:{context['route']}")
        if context.get('command'):
            tags.append(f"cmd:{context['command']}")
        return ' | '.join(tags)

    @staticmethod
    def metrics_summary(performance: Optional[Dict[str, Any]]) -> str:
        if not performance:
            return ''
        parts: List[str] = []
        if 'status_code' in performance:
            parts.append(f"HTTP {performance['status_code']}")
        if 'duration_seconds' in performance:
            parts.append(f"{performance['duration_seconds']:.3f}s")
        if 'items_per_second' in performance:
            parts.append(f"{performance['items_per_second']:.1f} items/s")
        if performance.get('status') == 'failed':
            parts.append('failed')
        return ', '.join(parts)

    def short_name(self, name: str) -> str:
        """``digipin.api.access`` stays; long dotted names keep their tail."""
        if len(name) <= self.name_width:
            return name
        tail = name.rsplit('.', 1)[-1]
        if len(tail) <= self.name_width - 3:
            return f"...{tail}"
        return f"{name[:self.name_width - 3]}..."

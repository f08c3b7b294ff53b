"""One-line JSON records for log files and aggregation."""

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict

# Promoted to the top level so a request or command can be filtered on directly
CORRELATION_KEYS = ('request_id', 'route', 'command')
# Already present at the top level
REDUNDANT_KEYS = ('logger_name', 'timestamp')


class JsonFormatter(logging.Formatter):
    """Serialize a structured record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc)
                                 .isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'source': f"{record.module}:{record.funcName}:{record.lineno}",
            'process': record.process,
            'thread': record.threadName,
        }

        context = dict(getattr(record, 'context', None) or {})
        for key in CORRELATION_KEYS:
            if key in context:
                entry[key] = context.pop(key)
        for key in REDUNDANT_KEYS:
            context.pop(key, None)
        if context:
            entry['context'] = context

        performance = getattr(record, 'performance', None)
        if performance:
            entry['performance'] = performance

        tb = getattr(record, 'traceback', None)
        if not tb and record.exc_info:
            tb = ''.join(traceback.format_exception(*record.exc_info))
        if tb:
            entry['traceback'] = tb

        return json.dumps(entry, separators=(',', ':'), default=str)

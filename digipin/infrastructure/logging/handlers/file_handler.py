"""Rotating JSON log file for deployed services."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

from ..formatters import JsonFormatter

DEFAULT_MAX_BYTES = 10 * 1024 * 1024


class FileHandler(RotatingFileHandler):
    """Size-rotated file of ``JsonFormatter`` lines, DEBUG and up.

    The parent directory is created on construction; the file itself is
    opened on the first record.
    """

    def __init__(self, filename: str, max_bytes: int = DEFAULT_MAX_BYTES,
                 backup_count: int = 5, encoding: str = 'utf-8'):
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)

        super().__init__(str(path), maxBytes=max_bytes, backupCount=backup_count,
                         encoding=encoding, delay=True)
        self.setFormatter(JsonFormatter())
        self.setLevel(logging.DEBUG)

    @classmethod
    def from_config(cls, config: Any, filename: Optional[str] = None) -> 'FileHandler':
        """Build from the ``logging`` config section.

        Args:
            config: Config instance (anything with dot-notation ``get``)
            filename: Overrides ``logging.file``
        """
        filename = filename or config.get('logging.file') or str(
            Path(config.get('paths.logs_dir', 'logs')) / 'digipin.log'
        )
        return cls(
            filename,
            max_bytes=config.get('logging.max_file_size', DEFAULT_MAX_BYTES),
            backup_count=config.get('logging.backup_count', 5),
        )

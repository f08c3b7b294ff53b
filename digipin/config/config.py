# digipin/config/config.py
"""Settings for the service, CLI and batch tools: defaults plus one YAML file."""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from . import defaults

logger = logging.getLogger(__name__)

SECTIONS = ('paths', 'logging', 'service', 'output', 'batch', 'testing')


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``override`` into ``base`` in place; nested mappings merge key by key."""
    for key, value in override.items():
        current = base.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            deep_merge(current, value)
        else:
            base[key] = value
    return base


def candidate_files() -> List[Path]:
    """Where a ``config.yml`` is looked for, first match wins."""
    project_root = Path(defaults.PROJECT_ROOT)
    return [
        Path.cwd() / 'config.yml',
        project_root / 'config.yml',
        project_root / 'config' / 'config.yml',
        Path.home() / '.digipin' / 'config.yml',
    ]


class Config:
    """Configuration manager with YAML override support.

    An explicit ``config_file`` is always read. Otherwise the first existing
    file from ``candidate_files()`` is used, except under pytest (or with
    ``FORCE_TEST_MODE=true``) where discovery is skipped so a developer's
    local config cannot leak into test runs.
    """

    def __init__(self, config_file: Optional[Path] = None):
        self.settings = self.load_defaults()
        self.config_file: Optional[Path] = None

        if config_file is not None:
            self.load_file(Path(config_file))
        elif self._is_test_mode():
            logger.debug("Test mode detected - ignoring discovered config.yml")
        else:
            found = next((p for p in candidate_files() if p.is_file()), None)
            if found is None:
                logger.debug("No config.yml found - using defaults only")
            else:
                self.load_file(found)

    @staticmethod
    def _is_test_mode() -> bool:
        return (
            os.environ.get('FORCE_TEST_MODE', 'false').lower() == 'true' or
            'PYTEST_CURRENT_TEST' in os.environ
        )

    @staticmethod
    def load_defaults() -> Dict[str, Any]:
        """Fresh copy of every section in ``defaults``."""
        return {name: copy.deepcopy(getattr(defaults, name.upper())) for name in SECTIONS}

    def load_file(self, config_file: Path):
        """Merge a YAML file over the current settings.

        A missing or unreadable file is logged and the current settings are
        kept.
        """
        if not config_file.exists():
            logger.warning(f"Config file not found: {config_file} - using defaults")
            return

        try:
            with open(config_file, 'r') as f:
                overrides = yaml.safe_load(f)
            if overrides is not None and not isinstance(overrides, dict):
                raise yaml.YAMLError(f"Top level of {config_file} must be a mapping")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Config file loading failed: {e} - using defaults")
            return

        deep_merge(self.settings, overrides or {})
        self.config_file = config_file
        logger.info(f"Loaded configuration from {config_file}")

    def get(self, key: str, default: Any = None) -> Any:
        """Dot-notation lookup, e.g. ``get('service.port')``."""
        node: Any = self.settings
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    @property
    def paths(self) -> Dict[str, Any]:
        return self.settings['paths']

    @property
    def logging(self) -> Dict[str, Any]:
        return self.settings['logging']

    @property
    def service(self) -> Dict[str, Any]:
        return self.settings['service']

    @property
    def output(self) -> Dict[str, Any]:
        return self.settings['output']

    @property
    def batch(self) -> Dict[str, Any]:
        return self.settings['batch']

    @property
    def testing(self) -> Dict[str, Any]:
        return self.settings.get('testing', {})


# Global configuration instance
config = Config()

# digipin/config/defaults.py
"""Default configuration values for the service, CLI and batch tools.

The grid itself (root region, symbol table, depth) is fixed in
``digipin.grid_systems.grid_specification`` and deliberately not listed here.
"""

import os
from pathlib import Path

# Project path
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = Path(os.getenv('DIGIPIN_LOGS_DIR', str(PROJECT_ROOT / 'logs')))

PATHS = {
    'project_root': str(PROJECT_ROOT),
    'logs_dir': str(LOGS_DIR),
}

LOGGING = {
    'level': os.getenv('DIGIPIN_LOG_LEVEL', 'INFO'),
    'console': True,
    'file_enabled': False,  # JSON file logging, enable in config.yml for deployments
    'file': str(LOGS_DIR / 'digipin.log'),
    'max_file_size': 10 * 1024 * 1024,  # 10MB
    'backup_count': 5,
    'show_context': True,
}

# HTTP service
SERVICE = {
    'host': os.getenv('DIGIPIN_HOST', '127.0.0.1'),
    'port': int(os.getenv('DIGIPIN_PORT', 3000)),
    'api_prefix': '/api/digipin',
    'docs_url': '/api-docs',
    'openapi_url': '/api-docs/openapi.json',
    'cors_origins': ['*'],
    'enforce_json_content_type': True,
    'access_log': True,
}

# Response formatting
OUTPUT = {
    'coordinate_precision': 6,  # decimals in decoded latitude/longitude strings
}

# Tabular batch processing
BATCH = {
    'latitude_column': 'latitude',
    'longitude_column': 'longitude',
    'code_column': 'digipin',
    'error_column': 'error',
    'errors': 'raise',  # raise | coerce
}

TESTING = {
    'sample_points': {
        'dak_bhawan': [28.622788, 77.213033],
        'new_delhi': [28.6139, 77.2090],
        'bengaluru': [12.9716, 77.5946],
    }
}

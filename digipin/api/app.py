"""FastAPI application factory for the DIGIPIN service."""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import Config, config as default_config
from ..grid_systems import DIGIPIN
from ..infrastructure.logging import get_logger
from .errors import register_error_handlers
from .middleware import add_access_log, add_content_type_check
from .routes import create_router

logger = get_logger(__name__)


def create_app(settings: Optional[Config] = None) -> FastAPI:
    """
    Build the HTTP service.

    Args:
        settings: Config instance (the global config if not provided)

    Returns:
        Configured FastAPI app; routes live under ``service.api_prefix`` and
        interactive docs under ``service.docs_url``.
    """
    settings = settings or default_config
    service = settings.service

    app = FastAPI(
        title='DIGIPIN API',
        version=__version__,
        description=(
            'Encode coordinates into DIGIPIN grid codes and decode them back. '
            f'Codes are {DIGIPIN.levels} symbols with separators after positions '
            f'{", ".join(str(p) for p in DIGIPIN.separator_after)}.'
        ),
        docs_url=service.get('docs_url', '/api-docs'),
        openapi_url=service.get('openapi_url', '/api-docs/openapi.json'),
        redoc_url=None,
    )
    app.state.settings = settings

    register_error_handlers(app)

    # Last added runs first: access log wraps CORS wraps the content-type check
    if service.get('enforce_json_content_type', True):
        add_content_type_check(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=service.get('cors_origins', ['*']),
        allow_methods=['*'],
        allow_headers=['*'],
    )
    if service.get('access_log', True):
        add_access_log(app)

    app.include_router(create_router(), prefix=service.get('api_prefix', '/api/digipin'))

    logger.debug(
        "DIGIPIN app created",
        extra={'context': {'api_prefix': service.get('api_prefix'),
                           'docs_url': service.get('docs_url')}}
    )
    return app

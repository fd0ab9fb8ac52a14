"""
Vot Romania API - Flask Application Entry Point

This module builds the Flask application with OpenAPI 3.0 support,
configures middleware, loads the application data snapshot and wires the
polling station resolution services.
"""

import os
import logging
from typing import Any, Dict, Optional

from flask_openapi3 import OpenAPI, Info

from observability.config import setup_observability
from observability.middleware import add_observability_middleware
from middleware.error_handler import ErrorHandlerMiddleware, register_custom_error_handlers
from middleware.validation import ValidationMiddleware, make_validation_error_callback
from domain.resolution import create_search_service
from services.hal import create_hal_formatter
from services.data_provider import DataLoadError, JsonFileDataProvider
from services.data_store import ApplicationDataStore
from services.repositories import (
    ApplicationContentRepository, PollingStationsRepository, PollingStationResolver
)

logger = logging.getLogger(__name__)

info = Info(
    title="Vot Romania API",
    version="1.0.0",
    description="Polling station lookup and multilingual voting guide content"
)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


def build_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Collect application configuration from the environment.

    Args:
        overrides: Values that take precedence over environment variables

    Returns:
        Configuration dictionary for ``app.config``
    """
    config = {
        'ENVIRONMENT': os.getenv('ENVIRONMENT', 'development'),
        'DOCS_ENABLED': _env_flag('DOCS_ENABLED', 'true'),
        'OTEL_ENABLED': _env_flag('OTEL_ENABLED', 'true'),
        'BASE_URL': os.getenv('BASE_URL', 'http://localhost:5000'),
        'DEFAULT_LANGUAGE': os.getenv('DEFAULT_LANGUAGE', 'Ro'),
        'DATA_SOURCE_PATH': os.getenv('DATA_SOURCE_PATH') or None,
        'SEARCH_STRATEGY': os.getenv('SEARCH_STRATEGY', 'indexed'),
        'DATA_RELOAD_INTERVAL_SECONDS': float(os.getenv('DATA_RELOAD_INTERVAL_SECONDS', '0')),
    }
    config.update(overrides or {})
    config['DEBUG'] = config['ENVIRONMENT'] == 'development'
    return config


def create_app(
    config: Optional[Dict[str, Any]] = None,
    data_store: Optional[ApplicationDataStore] = None
) -> OpenAPI:
    """
    Create and configure the Flask application.

    Args:
        config: Configuration overrides
        data_store: Pre-built data store; built from DATA_SOURCE_PATH when omitted

    Returns:
        Configured application
    """
    settings = build_config(config)

    # Initialize observability first
    setup_observability(settings['ENVIRONMENT'], settings['OTEL_ENABLED'])

    hal_formatter = create_hal_formatter(settings['BASE_URL'])
    validation_middleware = ValidationMiddleware(hal_formatter)

    app = OpenAPI(
        __name__,
        info=info,
        doc_ui=settings['DOCS_ENABLED'],
        validation_error_status=400,
        validation_error_callback=make_validation_error_callback(validation_middleware)
    )
    app.config.update(settings)

    add_observability_middleware(app)

    ErrorHandlerMiddleware(app, hal_formatter)
    register_custom_error_handlers(app, hal_formatter)

    # Application data and the services reading it
    if data_store is None:
        data_store = ApplicationDataStore(JsonFileDataProvider(settings['DATA_SOURCE_PATH']))
    if not data_store.is_loaded:
        try:
            data_store.reload()
        except DataLoadError as e:
            # Served as 503 until a reload succeeds
            logger.error("Starting without application data: %s", e.message)

    polling_stations_repository = PollingStationsRepository(data_store)
    search_service = create_search_service(settings['SEARCH_STRATEGY'])

    # Make services available to routes
    app.data_store = data_store
    app.polling_stations_repository = polling_stations_repository
    app.content_repository = ApplicationContentRepository(data_store)
    app.polling_station_resolver = PollingStationResolver(polling_stations_repository, search_service)
    app.hal_formatter = hal_formatter
    app.validation_middleware = validation_middleware

    if settings['DATA_RELOAD_INTERVAL_SECONDS'] > 0:
        data_store.start_background_reload(settings['DATA_RELOAD_INTERVAL_SECONDS'])

    # Register routes
    from routes.polling_stations import polling_stations_bp
    from routes.content import content_bp

    app.register_api(polling_stations_bp)
    app.register_api(content_bp)

    logger.info(
        "Vot Romania API configured",
        extra={
            "environment": settings['ENVIRONMENT'],
            "search_strategy": search_service.strategy.value,
            "default_language": settings['DEFAULT_LANGUAGE'],
            "data_loaded": data_store.is_loaded
        }
    )
    return app


if __name__ == '__main__':
    # Development server
    application = create_app()
    application.run(
        host='0.0.0.0',
        port=int(os.getenv('PORT', 5000)),
        debug=application.config['DEBUG']
    )

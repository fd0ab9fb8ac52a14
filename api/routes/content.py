# SPDX-License-Identifier: Apache-2.0

"""
Application content endpoints.

Serves the multilingual static texts and voting guides together with the
polling station list as one snapshot, and allows reloading that snapshot.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
import logging

from middleware.error_handler import NotFoundException, ServiceUnavailableException
from models.requests import LanguagePath
from models.responses import (
    ApplicationContentResponse, LanguagesResponse, StaticDataResponse, ReloadResponse,
    ErrorResponse
)
from services.data_provider import DataLoadError

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

content_tag = Tag(name="Application Content", description="Multilingual content and voting guides")
content_bp = APIBlueprint(
    'content',
    __name__,
    url_prefix='/api/application-content',
    abp_tags=[content_tag]
)


@content_bp.get('', responses={200: ApplicationContentResponse, 503: ErrorResponse})
def get_application_content():
    """Get the complete application data snapshot."""
    snapshot = current_app.data_store.snapshot
    return jsonify(snapshot.to_wire())


@content_bp.get('/languages', responses={200: LanguagesResponse, 503: ErrorResponse})
def get_languages():
    """List the available content languages."""
    languages = current_app.content_repository.get_languages()
    response = current_app.hal_formatter.format_languages(
        languages, current_app.config['DEFAULT_LANGUAGE']
    )
    return jsonify(response)


@content_bp.get(
    '/<string:language>',
    responses={200: StaticDataResponse, 404: ErrorResponse, 503: ErrorResponse}
)
def get_static_data(path: LanguagePath):
    """Get general information and the voting guide for one language."""
    static_data = current_app.content_repository.get_static_data(path.language)
    if static_data is None:
        raise NotFoundException(f"No content available for language '{path.language}'")

    return jsonify(current_app.hal_formatter.format_static_data(static_data))


@content_bp.post('/reload', responses={200: ReloadResponse, 503: ErrorResponse})
def reload_application_content():
    """
    Reload the application data snapshot.

    On failure the previously published snapshot keeps being served.
    """
    with tracer.start_as_current_span("content.reload.request") as span:
        try:
            snapshot = current_app.data_store.reload()
        except DataLoadError as e:
            span.set_status(Status(StatusCode.ERROR, e.message))
            raise ServiceUnavailableException(f"Reload failed: {e.message}") from e

        return jsonify({
            'message': "Application data reloaded",
            'languages': snapshot.languages,
            'pollingStations': len(snapshot.polling_stations_info),
            'loadedAt': snapshot.loaded_at.isoformat()
        })

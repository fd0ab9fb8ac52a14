# SPDX-License-Identifier: Apache-2.0

"""
Polling station endpoints.

Listing, detail view and address search over the current application data
snapshot.
"""

from flask import jsonify, current_app
from flask_openapi3 import APIBlueprint, Tag
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
import logging

from domain.resolution import DataUnavailable
from middleware.error_handler import NotFoundException, ServiceUnavailableException
from models.requests import AddressQuery, PaginationParams, StationPath
from models.responses import (
    HalCollection, PollingStationResponse, SearchCollection,
    ErrorResponse, ValidationErrorResponse
)

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

polling_stations_tag = Tag(name="Polling Stations", description="Polling station lookup")
polling_stations_bp = APIBlueprint(
    'polling_stations',
    __name__,
    url_prefix='/api/polling-stations',
    abp_tags=[polling_stations_tag]
)


@polling_stations_bp.get(
    '/search',
    responses={200: SearchCollection, 400: ValidationErrorResponse, 503: ErrorResponse}
)
def search_polling_stations(query: AddressQuery):
    """
    Find the polling stations serving an address.

    Accepts any subset of locality, street and number, or free-form text in
    ``q``. Exact matches come first, followed by partial matches grouped by
    how specific they are. No match is an empty result, not an error.
    """
    with tracer.start_as_current_span(
        "polling_stations.search.request",
        attributes={"operation": "search_polling_stations"}
    ) as span:
        try:
            matches = current_app.polling_station_resolver.search(query)
        except DataUnavailable as e:
            span.set_status(Status(StatusCode.ERROR, e.message))
            logger.error("Search rejected, polling station data unavailable")
            raise ServiceUnavailableException(e.message) from e

        logger.info(
            "Polling station search completed",
            extra={
                "has_locality": bool(query.locality),
                "has_street": bool(query.street),
                "has_number": bool(query.number),
                "free_form": bool(query.q),
                "results": len(matches)
            }
        )

        response = current_app.hal_formatter.format_search_results(matches, query)
        return jsonify(response)


@polling_stations_bp.get(
    '',
    responses={200: HalCollection, 400: ValidationErrorResponse, 503: ErrorResponse}
)
def list_polling_stations(query: PaginationParams):
    """List polling stations in dataset order."""
    repository = current_app.polling_stations_repository
    stations, total = repository.get_page(query.page, query.page_size)

    response = current_app.hal_formatter.format_polling_station_collection(
        stations, total, query.page, query.page_size
    )
    return jsonify(response)


@polling_stations_bp.get(
    '/<string:station_id>',
    responses={200: PollingStationResponse, 404: ErrorResponse, 503: ErrorResponse}
)
def get_polling_station(path: StationPath):
    """Get one polling station by ID."""
    station = current_app.polling_stations_repository.get_by_id(path.station_id)
    if station is None:
        raise NotFoundException(f"Polling station '{path.station_id}' not found")

    return jsonify(current_app.hal_formatter.format_polling_station(station))

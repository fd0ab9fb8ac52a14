# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Read-only repositories over the current application data snapshot.
"""

import logging
from typing import List, Optional, Tuple

from opentelemetry import trace

from domain.resolution import PollingStationSearchService, StationMatch
from models.entities import PollingStationInfo, StaticData
from models.requests import AddressQuery
from services.data_store import ApplicationDataStore

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)


class PollingStationsRepository:
    """Authoritative list of polling stations."""

    def __init__(self, store: ApplicationDataStore):
        self.store = store

    def get_all(self) -> Tuple[PollingStationInfo, ...]:
        """
        All stations of the current snapshot, in dataset order.

        Raises:
            DataUnavailable: If no snapshot is loaded
        """
        return self.store.snapshot.polling_stations_info

    def get_by_id(self, station_id: str) -> Optional[PollingStationInfo]:
        for station in self.get_all():
            if station.id == station_id:
                return station
        return None

    def get_page(self, page: int, page_size: int) -> Tuple[List[PollingStationInfo], int]:
        """Return one page of stations and the total count."""
        stations = self.get_all()
        start = (page - 1) * page_size
        return list(stations[start:start + page_size]), len(stations)

    def count(self) -> int:
        return len(self.get_all())


class ApplicationContentRepository:
    """Per-language static texts and voting guides."""

    def __init__(self, store: ApplicationDataStore):
        self.store = store

    def get_static_texts(self) -> Tuple[StaticData, ...]:
        return self.store.snapshot.static_texts

    def get_languages(self) -> List[str]:
        return self.store.snapshot.languages

    def get_static_data(self, language: str) -> Optional[StaticData]:
        return self.store.snapshot.find_static_data(language)


class PollingStationResolver:
    """Entry point for search requests: current dataset plus a search strategy."""

    def __init__(
        self,
        repository: PollingStationsRepository,
        search_service: PollingStationSearchService
    ):
        self.repository = repository
        self.search_service = search_service

    def search(self, query: AddressQuery) -> List[StationMatch]:
        """
        Resolve an address query against the current snapshot.

        Raises:
            DataUnavailable: If no snapshot is loaded
        """
        with tracer.start_as_current_span("polling_stations.search") as span:
            span.set_attributes({
                "search.strategy": self.search_service.strategy.value,
                "search.has_locality": bool(query.locality),
                "search.has_street": bool(query.street),
                "search.has_number": bool(query.number)
            })

            # Single read of the reference; a concurrent reload cannot mix datasets
            stations = self.repository.get_all()
            matches = self.search_service.resolve(query, stations)

            span.set_attribute("search.results", len(matches))
            return matches

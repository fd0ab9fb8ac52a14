# SPDX-License-Identifier: Apache-2.0

"""
Polling station resolution engine.

Maps a citizen's address input to the polling stations serving it. The
engine is a pure function of (query, dataset): nothing here mutates the
stations it is given, and results depend only on its inputs.

Matching walks the address hierarchy locality -> street -> number. Fields
missing from the query are wildcards. The walk stops at the first provided
field that does not match, so a station is a candidate only when the first
provided field matches, and candidates are ranked by how many provided
fields matched in a row. Ties keep dataset order.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from models.entities import PollingStationInfo
from models.enums import MatchLevel, SearchStrategy
from models.requests import AddressQuery
from domain.normalization import normalize_text, normalize_number

logger = logging.getLogger(__name__)


class DataUnavailable(Exception):
    """Raised when no polling station dataset has been loaded yet."""

    def __init__(self, message: str = "Polling station data is not available"):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class NormalizedQuery:
    """Address query with every component normalized for comparison."""
    locality: str = ""
    street: str = ""
    number: str = ""

    @classmethod
    def from_query(cls, query: Optional[AddressQuery]) -> "NormalizedQuery":
        if query is None:
            return cls()
        return cls(
            locality=normalize_text(query.locality),
            street=normalize_text(query.street),
            number=normalize_number(query.number)
        )

    def is_empty(self) -> bool:
        return not (self.locality or self.street or self.number)

    def provided_levels(self) -> List[Tuple[MatchLevel, str]]:
        """Provided components in hierarchy order."""
        levels = [
            (MatchLevel.LOCALITY, self.locality),
            (MatchLevel.STREET, self.street),
            (MatchLevel.NUMBER, self.number),
        ]
        return [(level, value) for level, value in levels if value]


@dataclass(frozen=True)
class NormalizedStation:
    """Comparison keys precomputed for one station."""
    position: int
    station: PollingStationInfo
    locality: str
    street: str
    number: str

    @classmethod
    def from_station(cls, position: int, station: PollingStationInfo) -> "NormalizedStation":
        return cls(
            position=position,
            station=station,
            locality=normalize_text(station.locality),
            street=normalize_text(station.street),
            number=normalize_number(station.number)
        )

    def value_for(self, level: MatchLevel) -> str:
        if level == MatchLevel.LOCALITY:
            return self.locality
        if level == MatchLevel.STREET:
            return self.street
        return self.number


@dataclass(frozen=True)
class StationMatch:
    """A candidate station with how specifically it matched the query."""
    station: PollingStationInfo
    specificity: int
    level: MatchLevel
    exact: bool
    position: int


def score_station(query: NormalizedQuery, candidate: NormalizedStation) -> Optional[StationMatch]:
    """
    Score one station against a query.

    Args:
        query: Normalized, non-empty query
        candidate: Normalized station

    Returns:
        StationMatch, or None when the first provided component differs
    """
    provided = query.provided_levels()
    specificity = 0
    deepest = MatchLevel.NONE

    for level, value in provided:
        if candidate.value_for(level) != value:
            break
        specificity += 1
        deepest = level

    if specificity == 0:
        return None

    return StationMatch(
        station=candidate.station,
        specificity=specificity,
        level=deepest,
        exact=specificity == len(provided),
        position=candidate.position
    )


def rank_matches(matches: List[StationMatch]) -> List[StationMatch]:
    """Order matches by specificity, most specific first, then dataset order."""
    return sorted(matches, key=lambda match: (-match.specificity, match.position))


class PollingStationSearchService(ABC):
    """Capability: resolve an address query against a polling station dataset."""

    strategy: SearchStrategy

    def resolve(
        self,
        query: Optional[AddressQuery],
        stations: Optional[Sequence[PollingStationInfo]]
    ) -> List[StationMatch]:
        """
        Resolve a query to ranked polling station candidates.

        Args:
            query: Citizen address query; empty or None yields no results
            stations: Dataset to search; None means no data is loaded

        Returns:
            Ranked list of matches, possibly empty

        Raises:
            DataUnavailable: If no dataset was supplied
        """
        if stations is None:
            raise DataUnavailable()

        normalized = NormalizedQuery.from_query(query)
        if normalized.is_empty():
            logger.debug("Empty address query, returning no candidates")
            return []

        matches = self._find_matches(normalized, stations)
        ranked = rank_matches(matches)

        logger.debug(
            "Address query resolved",
            extra={
                "strategy": self.strategy.value,
                "candidates": len(ranked),
                "exact_matches": sum(1 for match in ranked if match.exact)
            }
        )
        return ranked

    @abstractmethod
    def _find_matches(
        self,
        query: NormalizedQuery,
        stations: Sequence[PollingStationInfo]
    ) -> List[StationMatch]:
        """Return unordered matches for a normalized, non-empty query."""


class LinearSearchService(PollingStationSearchService):
    """Exhaustive scan over every station on each call."""

    strategy = SearchStrategy.LINEAR

    def _find_matches(self, query, stations):
        matches = []
        for position, station in enumerate(stations):
            match = score_station(query, NormalizedStation.from_station(position, station))
            if match is not None:
                matches.append(match)
        return matches


class StationIndex:
    """Normalized stations bucketed by the keys a query can start with."""

    def __init__(self, stations: Sequence[PollingStationInfo]):
        self.by_locality: Dict[str, List[NormalizedStation]] = {}
        self.by_street: Dict[str, List[NormalizedStation]] = {}
        self.by_number: Dict[str, List[NormalizedStation]] = {}

        for position, station in enumerate(stations):
            entry = NormalizedStation.from_station(position, station)
            self.by_locality.setdefault(entry.locality, []).append(entry)
            if entry.street:
                self.by_street.setdefault(entry.street, []).append(entry)
            if entry.number:
                self.by_number.setdefault(entry.number, []).append(entry)

    def candidates(self, query: NormalizedQuery) -> List[NormalizedStation]:
        """Stations whose first provided component matches the query."""
        if query.locality:
            return self.by_locality.get(query.locality, [])
        if query.street:
            return self.by_street.get(query.street, [])
        return self.by_number.get(query.number, [])


class IndexedSearchService(PollingStationSearchService):
    """
    Lookup through a precomputed index.

    The index is built once per dataset object and rebuilt when a different
    dataset is passed in. Datasets are replaced wholesale, never mutated, so
    identity is a safe cache key.
    """

    strategy = SearchStrategy.INDEXED

    def __init__(self):
        self._lock = threading.Lock()
        self._indexed_dataset: Optional[Sequence[PollingStationInfo]] = None
        self._index: Optional[StationIndex] = None

    def index_for(self, stations: Sequence[PollingStationInfo]) -> StationIndex:
        with self._lock:
            if self._index is None or self._indexed_dataset is not stations:
                self._index = StationIndex(stations)
                self._indexed_dataset = stations
                logger.info(
                    "Polling station index built",
                    extra={
                        "stations": len(stations),
                        "localities": len(self._index.by_locality)
                    }
                )
            return self._index

    def _find_matches(self, query, stations):
        index = self.index_for(stations)
        matches = []
        for candidate in index.candidates(query):
            match = score_station(query, candidate)
            if match is not None:
                matches.append(match)
        return matches


def create_search_service(strategy: str = SearchStrategy.INDEXED.value) -> PollingStationSearchService:
    """
    Create a search service for a configured strategy name.

    Raises:
        ValueError: If the strategy is unknown
    """
    strategy = SearchStrategy(str(strategy).lower())
    if strategy == SearchStrategy.LINEAR:
        return LinearSearchService()
    return IndexedSearchService()

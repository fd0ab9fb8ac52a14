# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Core entity models for the Vot Romania platform.

Everything here is reference data loaded once into an application snapshot,
so every model is frozen after validation.
"""

from datetime import datetime, timezone
from typing import List, Optional, Dict, Any, Tuple, Sequence
from pydantic import Field, field_validator, model_validator
from .base import ImmutableModel


class PollingStationInfo(ImmutableModel):
    """A physical voting location and the address it is registered under."""

    id: str = Field(..., min_length=1, description="Unique identifier")
    polling_station_number: Optional[str] = Field(None, description="Official station number")
    county: str = Field(..., description="County (judet)")
    locality: str = Field(..., description="Locality, town or Bucharest sector")
    street: Optional[str] = Field(None, description="Street name")
    number: Optional[str] = Field(None, description="Street number")
    institution: Optional[str] = Field(None, description="Hosting institution")
    address: Optional[str] = Field(None, description="Full display address")
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Latitude")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Longitude")
    capacity: Optional[int] = Field(None, ge=0, description="Registered voter capacity")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Additional attributes")

    @field_validator('county', 'locality')
    @classmethod
    def validate_required_text(cls, v):
        """Validate that required address parts are not blank."""
        if not v.strip():
            raise ValueError('Address component cannot be empty')
        return v.strip()

    @field_validator('number', mode='before')
    @classmethod
    def coerce_number(cls, v):
        """Street numbers arrive as ints in some datasets."""
        if v is None:
            return v
        return str(v).strip() or None


class GuideSection(ImmutableModel):
    """One section of the voting guide with its ordered steps."""

    title: str = Field(..., description="Section title")
    steps: Tuple[str, ...] = Field(default_factory=tuple, description="Ordered instructions")


class VotingGuide(ImmutableModel):
    """Structured step-by-step voting instructions for one language."""

    title: str = Field(default="", description="Guide title")
    sections: Tuple[GuideSection, ...] = Field(default_factory=tuple, description="Guide sections")


class StaticData(ImmutableModel):
    """Per-language bundle of general information and the voting guide."""

    language: str = Field(..., min_length=1, max_length=10, description="Language code")
    general_info: str = Field(default="", description="General information text")
    voters_guide: VotingGuide = Field(default_factory=VotingGuide, description="Voting guide")

    @field_validator('language')
    @classmethod
    def validate_language(cls, v):
        """Validate language code."""
        if not v.strip():
            raise ValueError('Language code cannot be empty')
        return v.strip()


class ApplicationDataSnapshot(ImmutableModel):
    """
    All content and polling station data produced by a single load.

    A snapshot is never patched; a reload produces a new one that replaces
    the old reference wholesale.
    """

    static_texts: Tuple[StaticData, ...] = Field(default_factory=tuple, description="Per-language content")
    polling_stations_info: Tuple[PollingStationInfo, ...] = Field(
        default_factory=tuple, description="Polling stations"
    )
    loaded_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Load timestamp"
    )

    @model_validator(mode='after')
    def validate_unique_languages(self):
        """Validate that each language code appears at most once."""
        seen = set()
        for entry in self.static_texts:
            if entry.language in seen:
                raise ValueError(f'Duplicate static data for language "{entry.language}"')
            seen.add(entry.language)
        return self

    @model_validator(mode='after')
    def validate_unique_station_ids(self):
        """Validate that polling station identifiers are unique."""
        seen = set()
        for station in self.polling_stations_info:
            if station.id in seen:
                raise ValueError(f'Duplicate polling station id "{station.id}"')
            seen.add(station.id)
        return self

    @property
    def languages(self) -> List[str]:
        """Language codes in dataset order."""
        return [entry.language for entry in self.static_texts]

    def find_static_data(self, language: str) -> Optional[StaticData]:
        """Return the entry for a language code, or None."""
        return find_static_data(self.static_texts, language)


def find_static_data(static_texts: Optional[Sequence[StaticData]], language: str) -> Optional[StaticData]:
    """Look up the StaticData entry whose language equals the given code."""
    if not static_texts:
        return None
    for entry in static_texts:
        if entry.language == language:
            return entry
    return None

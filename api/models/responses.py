# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Response models for API endpoints with HAL support.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class HalLink(BaseModel):
    """HAL link representation."""

    href: str = Field(..., description="Link URL")
    method: Optional[str] = Field(None, description="HTTP method")
    type: Optional[str] = Field(None, description="Content type")
    title: Optional[str] = Field(None, description="Link title")
    templated: Optional[bool] = Field(None, description="Whether URL is templated")


class HalResponse(BaseModel):
    """Base HAL response with links."""

    model_config = ConfigDict(populate_by_name=True)

    links: Dict[str, HalLink] = Field(default_factory=dict, alias="_links", description="HAL links")


class PollingStationResponse(HalResponse):
    """Polling station resource."""

    id: str = Field(..., description="Polling station ID")
    pollingStationNumber: Optional[str] = Field(None, description="Official station number")
    county: str = Field(..., description="County")
    locality: str = Field(..., description="Locality")
    street: Optional[str] = Field(None, description="Street name")
    number: Optional[str] = Field(None, description="Street number")
    institution: Optional[str] = Field(None, description="Hosting institution")
    address: Optional[str] = Field(None, description="Full display address")
    latitude: Optional[float] = Field(None, description="Latitude")
    longitude: Optional[float] = Field(None, description="Longitude")
    capacity: Optional[int] = Field(None, description="Registered voter capacity")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Additional attributes")


class SearchResultResponse(PollingStationResponse):
    """Polling station candidate with match details."""

    rank: int = Field(..., description="1-based position in the result list")
    specificity: int = Field(..., description="Number of query components matched in a row")
    matchLevel: str = Field(..., description="Deepest address level matched")
    exact: bool = Field(..., description="Whether every provided component matched")


class HalCollection(HalResponse):
    """HAL collection response with embedded items."""

    embedded: Dict[str, List[Dict[str, Any]]] = Field(
        default_factory=dict, alias="_embedded", description="Embedded resources"
    )
    total: int = Field(..., description="Total number of items")
    page: int = Field(..., description="Current page number")
    page_size: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Total number of pages")


class SearchCollection(HalResponse):
    """Ranked search results."""

    embedded: Dict[str, List[SearchResultResponse]] = Field(
        default_factory=dict, alias="_embedded", description="Ranked candidates"
    )
    total: int = Field(..., description="Number of candidates")
    exactMatches: int = Field(..., description="Number of exact matches")
    query: Dict[str, Optional[str]] = Field(default_factory=dict, description="Interpreted query")


class ApplicationContentResponse(BaseModel):
    """Complete snapshot as consumed by the web client."""

    staticTexts: List[Dict[str, Any]] = Field(..., description="Per-language content")
    pollingStationsInfo: List[Dict[str, Any]] = Field(..., description="Polling stations")
    loadedAt: str = Field(..., description="Snapshot load timestamp")


class LanguagesResponse(HalResponse):
    """Available language codes."""

    languages: List[str] = Field(default_factory=list, description="Language codes")
    defaultLanguage: Optional[str] = Field(None, description="Language shown before the user picks one")


class StaticDataResponse(HalResponse):
    """Content for one language."""

    language: str = Field(..., description="Language code")
    generalInfo: str = Field(..., description="General information text")
    votersGuide: Dict[str, Any] = Field(..., description="Voting guide sections and steps")


class ReloadResponse(BaseModel):
    """Outcome of a data reload."""

    message: str = Field(..., description="Result message")
    languages: List[str] = Field(default_factory=list, description="Loaded languages")
    pollingStations: int = Field(..., description="Loaded polling station count")
    loadedAt: str = Field(..., description="Snapshot load timestamp")


class ErrorResponse(BaseModel):
    """Error response model following RFC 7807."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(..., description="Error type URI")
    title: str = Field(..., description="Error title")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Error detail")
    instance: str = Field(..., description="Request instance")
    errors: Optional[List[Dict[str, Any]]] = Field(None, description="Validation errors")
    links: Optional[Dict[str, HalLink]] = Field(None, alias="_links", description="HAL links")


class ValidationErrorResponse(ErrorResponse):
    """Validation error response with field details."""

    errors: List[Dict[str, Any]] = Field(..., description="Field validation errors")

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Models package - Pydantic schemas and data models for the Vot Romania platform.
"""

# Base models
from .base import ImmutableModel, RequestModel

# Enumerations
from .enums import MatchLevel, SearchStrategy

# Core entities
from .entities import (
    PollingStationInfo,
    GuideSection,
    VotingGuide,
    StaticData,
    ApplicationDataSnapshot,
    find_static_data
)

# Request models
from .requests import AddressQuery, PaginationParams, StationPath, LanguagePath

# Response models
from .responses import (
    HalLink,
    HalResponse,
    HalCollection,
    PollingStationResponse,
    SearchResultResponse,
    SearchCollection,
    ApplicationContentResponse,
    LanguagesResponse,
    StaticDataResponse,
    ReloadResponse,
    ErrorResponse,
    ValidationErrorResponse
)

__all__ = [
    # Base models
    "ImmutableModel",
    "RequestModel",

    # Enumerations
    "MatchLevel",
    "SearchStrategy",

    # Core entities
    "PollingStationInfo",
    "GuideSection",
    "VotingGuide",
    "StaticData",
    "ApplicationDataSnapshot",
    "find_static_data",

    # Request models
    "AddressQuery",
    "PaginationParams",
    "StationPath",
    "LanguagePath",

    # Response models
    "HalLink",
    "HalResponse",
    "HalCollection",
    "PollingStationResponse",
    "SearchResultResponse",
    "SearchCollection",
    "ApplicationContentResponse",
    "LanguagesResponse",
    "StaticDataResponse",
    "ReloadResponse",
    "ErrorResponse",
    "ValidationErrorResponse"
]

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Services package - Data loading, repositories and external integrations.
"""

from .data_provider import (
    DataLoadError, DataProvider, JsonFileDataProvider, StaticDataProvider, build_snapshot
)
from .data_store import ApplicationDataStore
from .repositories import (
    ApplicationContentRepository, PollingStationsRepository, PollingStationResolver
)

__all__ = [
    "DataLoadError",
    "DataProvider",
    "JsonFileDataProvider",
    "StaticDataProvider",
    "build_snapshot",
    "ApplicationDataStore",
    "ApplicationContentRepository",
    "PollingStationsRepository",
    "PollingStationResolver"
]

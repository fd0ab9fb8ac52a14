# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Data providers that produce application data snapshots.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Union

from opentelemetry import trace
from pydantic import ValidationError

from models.entities import ApplicationDataSnapshot

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)

DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "application_data.json"


class DataLoadError(Exception):
    """Raised when a snapshot cannot be produced; the message is user-readable."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DataProvider(ABC):
    """Source of complete application data snapshots."""

    @abstractmethod
    def load(self) -> ApplicationDataSnapshot:
        """
        Produce a new snapshot.

        Raises:
            DataLoadError: If the data cannot be read or is invalid
        """


def build_snapshot(payload: Dict[str, Any]) -> ApplicationDataSnapshot:
    """
    Validate a raw payload into a snapshot.

    Args:
        payload: Dict with ``staticTexts`` and ``pollingStationsInfo``

    Raises:
        DataLoadError: If the payload violates the snapshot schema
    """
    if not isinstance(payload, dict):
        raise DataLoadError("Application data must be a JSON object")
    try:
        return ApplicationDataSnapshot.model_validate(payload)
    except ValidationError as e:
        raise DataLoadError(
            f"Application data is invalid ({e.error_count()} errors): {e.errors()[0]['msg']}"
        ) from e


class JsonFileDataProvider(DataProvider):
    """Reads the application dataset from a JSON file on disk."""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path else DEFAULT_DATA_PATH

    def load(self) -> ApplicationDataSnapshot:
        with tracer.start_as_current_span("data_provider.json_file.load") as span:
            span.set_attribute("data.path", str(self.path))
            try:
                with self.path.open(encoding="utf-8") as fh:
                    payload = json.load(fh)
            except FileNotFoundError as e:
                logger.error("Application data file not found: %s", self.path)
                raise DataLoadError(f"Application data file not found: {self.path.name}") from e
            except json.JSONDecodeError as e:
                logger.error("Invalid JSON in %s: %s", self.path.name, e)
                raise DataLoadError(f"Application data file is not valid JSON: {e.msg}") from e
            except UnicodeDecodeError as e:
                logger.error("Application data file %s is not UTF-8: %s", self.path.name, e)
                raise DataLoadError("Application data file is not valid UTF-8 text") from e
            except OSError as e:
                logger.error("Cannot read application data file %s: %s", self.path, e)
                reason = e.strerror or e.__class__.__name__
                raise DataLoadError(f"Application data file cannot be read: {reason}") from e

            snapshot = build_snapshot(payload)
            span.set_attributes({
                "data.languages": len(snapshot.static_texts),
                "data.polling_stations": len(snapshot.polling_stations_info)
            })
            logger.info(
                "Loaded %d languages and %d polling stations from %s",
                len(snapshot.static_texts),
                len(snapshot.polling_stations_info),
                self.path.name
            )
            return snapshot


class StaticDataProvider(DataProvider):
    """Serves a fixed payload; used for seeding and tests."""

    def __init__(self, payload: Union[Dict[str, Any], ApplicationDataSnapshot]):
        self.payload = payload

    def load(self) -> ApplicationDataSnapshot:
        if isinstance(self.payload, ApplicationDataSnapshot):
            # New instance so every load yields a distinct snapshot reference
            return self.payload.model_copy()
        return build_snapshot(self.payload)

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
HTTP client for the Vot Romania API.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from models.entities import ApplicationDataSnapshot
from services.data_provider import DataLoadError, build_snapshot

logger = logging.getLogger(__name__)


class VotRomaniaClient:
    """Fetches application content and search results over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as e:
            logger.warning("Request to %s timed out", url)
            raise DataLoadError(f"The server did not respond within {self.timeout} seconds") from e
        except requests.RequestException as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise DataLoadError("Could not reach the server") from e

        if response.status_code != 200:
            detail = ""
            try:
                body = response.json()
                if isinstance(body, dict):
                    detail = body.get("detail", "")
            except ValueError:
                pass
            logger.warning(
                "Unexpected response",
                extra={"url": url, "status_code": response.status_code, "detail": detail}
            )
            raise DataLoadError(detail or f"Server responded with status {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise DataLoadError("Server response is not valid JSON") from e

    def fetch_snapshot(self) -> ApplicationDataSnapshot:
        """
        Load all application content and polling stations.

        Raises:
            DataLoadError: On network failure, timeout, error status or bad payload
        """
        return build_snapshot(self._get_json("/api/application-content"))

    def search_polling_stations(
        self,
        locality: Optional[str] = None,
        street: Optional[str] = None,
        number: Optional[str] = None,
        q: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Return embedded search result items as dicts."""
        params = {
            key: value for key, value in
            {"locality": locality, "street": street, "number": number, "q": q}.items()
            if value
        }
        payload = self._get_json("/api/polling-stations/search", params)
        return payload.get("_embedded", {}).get("items", [])

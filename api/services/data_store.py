# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Holder of the current application data snapshot.

Readers take the snapshot reference once and work on that object for the
whole request. Reloads build a complete new snapshot first and only then
swap the reference, so a reader sees either the old or the new data in
full, never a mix.
"""

import logging
import threading
import time
from typing import Optional

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from domain.resolution import DataUnavailable
from models.entities import ApplicationDataSnapshot
from services.data_provider import DataProvider, DataLoadError

tracer = trace.get_tracer(__name__)
logger = logging.getLogger(__name__)


class ApplicationDataStore:
    """Loads snapshots from a provider and publishes them atomically."""

    def __init__(self, provider: DataProvider):
        self.provider = provider
        self._snapshot: Optional[ApplicationDataSnapshot] = None
        self._swap_lock = threading.Lock()
        self._reload_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._reload_thread: Optional[threading.Thread] = None
        self.last_error: Optional[str] = None
        self.reload_count = 0

    @property
    def snapshot(self) -> ApplicationDataSnapshot:
        """
        Current snapshot.

        Raises:
            DataUnavailable: If no load has succeeded yet
        """
        snapshot = self._snapshot
        if snapshot is None:
            raise DataUnavailable(self.last_error or "Application data has not been loaded")
        return snapshot

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def peek(self) -> Optional[ApplicationDataSnapshot]:
        """Current snapshot or None, without raising."""
        return self._snapshot

    def reload(self) -> ApplicationDataSnapshot:
        """
        Load a new snapshot and replace the current one.

        A failed load leaves the current snapshot in place.

        Raises:
            DataLoadError: If the provider fails
        """
        with self._reload_lock, tracer.start_as_current_span("data_store.reload") as span:
            started = time.time()
            try:
                snapshot = self.provider.load()
            except DataLoadError as e:
                self.last_error = e.message
                span.set_status(Status(StatusCode.ERROR, e.message))
                logger.error(
                    "Application data reload failed",
                    extra={
                        "error": e.message,
                        "keeping_previous_snapshot": self._snapshot is not None
                    }
                )
                raise

            with self._swap_lock:
                self._snapshot = snapshot
                self.reload_count += 1
            self.last_error = None

            duration_ms = round((time.time() - started) * 1000, 2)
            span.set_attributes({
                "data.languages": len(snapshot.static_texts),
                "data.polling_stations": len(snapshot.polling_stations_info),
                "data.duration_ms": duration_ms
            })
            logger.info(
                "Application data snapshot published",
                extra={
                    "languages": snapshot.languages,
                    "polling_stations": len(snapshot.polling_stations_info),
                    "duration_ms": duration_ms,
                    "reload_count": self.reload_count
                }
            )
            return snapshot

    def start_background_reload(self, interval_seconds: float) -> None:
        """Reload periodically on a daemon thread until stopped."""
        if interval_seconds <= 0:
            raise ValueError("Reload interval must be positive")
        if self._reload_thread is not None and self._reload_thread.is_alive():
            return

        self._stop_event.clear()
        self._reload_thread = threading.Thread(
            target=self._reload_loop,
            args=(interval_seconds,),
            name="application-data-reload",
            daemon=True
        )
        self._reload_thread.start()
        logger.info("Background data reload started every %s seconds", interval_seconds)

    def stop_background_reload(self, timeout: float = 5.0) -> None:
        self._stop_event.set()
        if self._reload_thread is not None:
            self._reload_thread.join(timeout=timeout)
            self._reload_thread = None

    def _reload_loop(self, interval_seconds: float) -> None:
        while not self._stop_event.wait(interval_seconds):
            try:
                self.reload()
            except DataLoadError:
                # Already logged; previous snapshot stays published
                continue
            except Exception:
                logger.exception(
                    "Unexpected error during background data reload",
                    extra={"keeping_previous_snapshot": self._snapshot is not None}
                )

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Client-side holder of the content session state.
"""

import logging
import threading
from typing import Any, Callable, List

from domain import content_state
from domain.content_state import ContentSessionState, LanguageChanged, LoadFailed, SnapshotLoaded
from models.entities import ApplicationDataSnapshot
from services.data_provider import DataLoadError

logger = logging.getLogger(__name__)

Listener = Callable[[ContentSessionState], None]


class ContentSession:
    """
    Single writer of a ContentSessionState.

    Actions are applied one at a time in arrival order; listeners are
    notified only when an action produced a different state.
    """

    def __init__(self, default_language: str = content_state.DEFAULT_LANGUAGE):
        self._state = content_state.initial_state(default_language)
        self._lock = threading.Lock()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> ContentSessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Any) -> ContentSessionState:
        with self._lock:
            previous = self._state
            self._state = content_state.reduce(previous, action)
            current = self._state
            listeners = list(self._listeners)

        if current is previous:
            logger.debug("Action %s left content state unchanged", type(action).__name__)
        else:
            for listener in listeners:
                listener(current)
        return current

    def load(self, loader: Callable[[], ApplicationDataSnapshot]) -> ContentSessionState:
        """
        Run a load operation and feed its outcome into the state.

        Failures are recorded in ``error``; displayed content is kept.
        """
        try:
            snapshot = loader()
        except DataLoadError as e:
            logger.warning("Content load failed: %s", e.message)
            return self.dispatch(LoadFailed(e.message))
        return self.dispatch(SnapshotLoaded(snapshot))

    def change_language(self, language: str) -> ContentSessionState:
        return self.dispatch(LanguageChanged(language))

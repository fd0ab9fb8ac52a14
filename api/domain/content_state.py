# SPDX-License-Identifier: Apache-2.0

"""
Content session state for multilingual guide content.

The displayed general information and voting guide must always belong to
the selected language. State is an immutable value and every change goes
through ``reduce``, a pure function of (state, action) -> state:

* ``SnapshotLoaded``: adopt a new snapshot if it has the selected language,
  otherwise keep the current state.
* ``LanguageChanged``: switch language if the held content has it,
  otherwise keep the current state.
* ``LoadFailed``: record the failure message, keep everything else.

Any other action returns the state unchanged.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from models.entities import (
    ApplicationDataSnapshot, PollingStationInfo, StaticData, VotingGuide, find_static_data
)

DEFAULT_LANGUAGE = "Ro"


class ContentSessionState(BaseModel):
    """What the citizen currently sees."""

    model_config = ConfigDict(frozen=True)

    selected_language: str = Field(default=DEFAULT_LANGUAGE, description="Selected language code")
    general_info: str = Field(default="", description="General information for the selected language")
    voting_guide: Optional[VotingGuide] = Field(None, description="Voting guide for the selected language")
    languages: Tuple[str, ...] = Field(default_factory=tuple, description="Languages in the loaded snapshot")
    static_texts: Optional[Tuple[StaticData, ...]] = Field(None, description="Content of the loaded snapshot")
    polling_stations: Tuple[PollingStationInfo, ...] = Field(
        default_factory=tuple, description="Polling stations of the loaded snapshot"
    )
    error: str = Field(default="", description="Last load failure, empty when none")


@dataclass(frozen=True)
class SnapshotLoaded:
    snapshot: ApplicationDataSnapshot


@dataclass(frozen=True)
class LanguageChanged:
    language: str


@dataclass(frozen=True)
class LoadFailed:
    message: str


def initial_state(default_language: str = DEFAULT_LANGUAGE) -> ContentSessionState:
    """State before any snapshot has arrived."""
    return ContentSessionState(selected_language=default_language)


def is_ready(state: ContentSessionState) -> bool:
    """Check whether a snapshot has been adopted."""
    return state.static_texts is not None


def reduce(state: ContentSessionState, action: Any) -> ContentSessionState:
    """Apply one action and return the next state."""
    if isinstance(action, SnapshotLoaded):
        return _on_snapshot_loaded(state, action.snapshot)
    if isinstance(action, LanguageChanged):
        return _on_language_changed(state, action.language)
    if isinstance(action, LoadFailed):
        return state.model_copy(update={"error": action.message})
    return state


def _on_snapshot_loaded(
    state: ContentSessionState,
    snapshot: ApplicationDataSnapshot
) -> ContentSessionState:
    language_data = snapshot.find_static_data(state.selected_language)
    if language_data is None:
        return state

    return state.model_copy(update={
        "languages": tuple(snapshot.languages),
        "static_texts": snapshot.static_texts,
        "general_info": language_data.general_info,
        "voting_guide": language_data.voters_guide,
        "polling_stations": snapshot.polling_stations_info,
        "error": ""
    })


def _on_language_changed(state: ContentSessionState, language: str) -> ContentSessionState:
    language_data = find_static_data(state.static_texts, language)
    if language_data is None:
        return state

    return state.model_copy(update={
        "selected_language": language,
        "general_info": language_data.general_info,
        "voting_guide": language_data.voters_guide
    })

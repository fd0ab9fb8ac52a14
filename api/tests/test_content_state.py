# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for content session state transitions.
"""

from domain.content_state import (
    DEFAULT_LANGUAGE, LanguageChanged, LoadFailed, SnapshotLoaded,
    initial_state, is_ready, reduce
)
from models.entities import ApplicationDataSnapshot


class TestInitialState:

    def test_defaults(self):
        state = initial_state()

        assert state.selected_language == DEFAULT_LANGUAGE == "Ro"
        assert state.general_info == ""
        assert state.voting_guide is None
        assert state.static_texts is None
        assert state.error == ""
        assert not is_ready(state)

    def test_custom_default_language(self):
        assert initial_state("En").selected_language == "En"


class TestSnapshotLoaded:
    """Adopting a loaded snapshot."""

    def test_adopts_content_for_selected_language(self, snapshot):
        state = reduce(initial_state(), SnapshotLoaded(snapshot))

        assert is_ready(state)
        assert state.general_info == "Informații generale"
        assert state.voting_guide.title == "Ghidul alegătorului"
        assert state.languages == ("Ro", "En")
        assert len(state.polling_stations) == 5

    def test_snapshot_without_selected_language_is_ignored(self, sample_polling_stations):
        snapshot = ApplicationDataSnapshot.model_validate({
            "staticTexts": [{"language": "Hu", "generalInfo": "Általános információk"}],
            "pollingStationsInfo": sample_polling_stations
        })
        state = initial_state()

        assert reduce(state, SnapshotLoaded(snapshot)) is state

    def test_ready_state_ignores_snapshot_without_selected_language(self, snapshot, sample_polling_stations):
        ready = reduce(reduce(initial_state(), SnapshotLoaded(snapshot)), LanguageChanged("En"))
        replacement = ApplicationDataSnapshot.model_validate({
            "staticTexts": [
                {"language": "Ro", "generalInfo": "Informații noi"},
                {"language": "Hu", "generalInfo": "Általános információk"}
            ],
            "pollingStationsInfo": sample_polling_stations[:1]
        })

        state = reduce(ready, SnapshotLoaded(replacement))

        assert state is ready
        assert state.general_info == "General information"
        assert state.voting_guide.title == "Voter guide"
        assert len(state.polling_stations) == 5

    def test_clears_previous_error(self, snapshot):
        failed = reduce(initial_state(), LoadFailed("Could not reach the server"))

        state = reduce(failed, SnapshotLoaded(snapshot))

        assert state.error == ""

    def test_keeps_selected_language(self, snapshot):
        state = reduce(initial_state("En"), SnapshotLoaded(snapshot))

        assert state.selected_language == "En"
        assert state.general_info == "General information"


class TestLanguageChanged:
    """Switching the displayed language."""

    def test_switches_content(self, snapshot):
        loaded = reduce(initial_state(), SnapshotLoaded(snapshot))

        state = reduce(loaded, LanguageChanged("En"))

        assert state.selected_language == "En"
        assert state.general_info == "General information"
        assert state.voting_guide.title == "Voter guide"
        assert state.polling_stations == loaded.polling_stations

    def test_unknown_language_is_a_no_op(self, snapshot):
        loaded = reduce(initial_state(), SnapshotLoaded(snapshot))

        assert reduce(loaded, LanguageChanged("Fr")) is loaded

    def test_before_load_is_a_no_op(self):
        state = initial_state()

        assert reduce(state, LanguageChanged("En")) is state

    def test_language_codes_are_case_sensitive(self, snapshot):
        loaded = reduce(initial_state(), SnapshotLoaded(snapshot))

        assert reduce(loaded, LanguageChanged("en")) is loaded


class TestLoadFailed:

    def test_records_error_and_keeps_content(self, snapshot):
        loaded = reduce(initial_state(), SnapshotLoaded(snapshot))

        state = reduce(loaded, LoadFailed("Server responded with status 500"))

        assert state.error == "Server responded with status 500"
        assert state.general_info == loaded.general_info
        assert state.static_texts == loaded.static_texts


class TestUnknownAction:

    def test_returns_same_state(self, snapshot):
        state = reduce(initial_state(), SnapshotLoaded(snapshot))

        assert reduce(state, {"type": "SomethingElse"}) is state
        assert reduce(state, None) is state

    def test_states_are_immutable_values(self, snapshot):
        state = initial_state()

        reduce(state, SnapshotLoaded(snapshot))

        assert state.static_texts is None

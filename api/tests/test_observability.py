# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Tests for logging and tracing setup.
"""

import json
import logging

from observability.config import StructuredFormatter, setup_observability


class TestStructuredFormatter:

    def _record(self, **extra):
        record = logging.LogRecord(
            "services.data_store", logging.INFO, __file__, 1,
            "Application data snapshot published", (), None
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_json_line_with_extra_fields(self):
        line = StructuredFormatter().format(self._record(polling_stations=6, languages=["Ro", "En"]))

        entry = json.loads(line)
        assert entry["level"] == "INFO"
        assert entry["logger"] == "services.data_store"
        assert entry["message"] == "Application data snapshot published"
        assert entry["polling_stations"] == 6
        assert entry["languages"] == ["Ro", "En"]
        assert "trace_id" not in entry

    def test_non_ascii_is_kept(self):
        record = self._record(locality="București")

        assert "București" in StructuredFormatter().format(record)


class TestSetupObservability:

    def test_disabled_in_test_environment(self):
        assert setup_observability("test", enabled=True) is False

    def test_disabled_by_flag(self):
        assert setup_observability("development", enabled=False) is False

    def test_single_structured_handler(self):
        setup_observability("test", enabled=False)
        setup_observability("test", enabled=False)

        handlers = [
            handler for handler in logging.getLogger().handlers
            if isinstance(handler.formatter, StructuredFormatter)
        ]
        assert len(handlers) == 1

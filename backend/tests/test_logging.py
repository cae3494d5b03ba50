"""Tests for log formatting and configuration."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from app.core.logging import PLAIN_FORMAT, JSONFormatter, request_id_var, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "engine.wind.weibull", logging.INFO, __file__, 1, "fit on %d samples", (8760,), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_basic_fields(self):
        entry = json.loads(JSONFormatter().format(_record()))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "engine.wind.weibull"
        assert entry["message"] == "fit on 8760 samples"
        assert "request_id" not in entry

    def test_fit_extras(self):
        entry = json.loads(JSONFormatter().format(_record(shape_k=2.01, scale_c=7.93, n_samples=8760)))
        assert entry["shape_k"] == 2.01
        assert entry["scale_c"] == 7.93
        assert entry["n_samples"] == 8760

    def test_request_id(self):
        token = request_id_var.set("req-42")
        try:
            entry = json.loads(JSONFormatter().format(_record()))
        finally:
            request_id_var.reset(token)
        assert entry["request_id"] == "req-42"


class TestSetupLogging:
    def test_single_handler(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_json_formatter_selected(self):
        setup_logging(json_format=True, level=logging.DEBUG)
        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.DEBUG

    def test_level_name_accepted(self):
        setup_logging(level="WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_logs_go_to_stderr(self):
        setup_logging()
        assert logging.getLogger().handlers[0].stream is sys.stderr
        assert logging.getLogger().handlers[0].formatter._fmt == PLAIN_FORMAT

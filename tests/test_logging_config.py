"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging

import structlog

from csp_builder.logging_config import setup_logging


class TestSetupLogging:
    def test_json_output(self):
        stream = io.StringIO()
        setup_logging("debug", json_format=True, stream=stream)
        structlog.get_logger("csp_test").info("policy_compiled", directives=2)

        record = json.loads(stream.getvalue().splitlines()[-1])
        assert record["event"] == "policy_compiled"
        assert record["directives"] == 2
        assert record["level"] == "info"
        assert record["module"] == "csp_test"
        assert "logger" not in record
        assert "timestamp" in record

    def test_console_output(self):
        stream = io.StringIO()
        setup_logging("info", json_format=False, stream=stream)
        structlog.get_logger("csp_test").warning("policy_mutation_after_compile", directive="img-src")

        output = stream.getvalue()
        assert "policy_mutation_after_compile" in output
        assert "directive=img-src" in output

    def test_level_applied_to_root_logger(self):
        setup_logging("warning", stream=io.StringIO())
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty", stream=io.StringIO())
        assert logging.getLogger().level == logging.INFO

    def test_below_level_is_dropped(self):
        stream = io.StringIO()
        setup_logging("warning", stream=stream)
        structlog.get_logger("csp_test").debug("policy_compiled")
        assert stream.getvalue() == ""

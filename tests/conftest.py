"""Shared test fixtures."""

from __future__ import annotations

import logging

import pytest
import structlog

from csp_builder.config.presets import reset_presets_cache


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch):
    """Provide default settings for all tests."""
    for key in ("CSP_PRESETS_FILE", "CSP_DEFAULT_PRESET", "CSP_REPORT_ONLY"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("CSP_LOG_JSON", "false")
    monkeypatch.setenv("CSP_LOG_LEVEL", "debug")

    # Reset cached settings
    import csp_builder.config.loader as loader
    loader._settings = None
    yield
    loader._settings = None


@pytest.fixture(autouse=True)
def _reset_presets():
    reset_presets_cache()
    yield
    reset_presets_cache()


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo any structlog/stdlib logging configuration a test applied."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)

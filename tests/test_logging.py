"""Tests for structlog configuration."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest
import structlog

from ghbridge.core.logging import setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestSetupLogging:
    def test_level_from_env(self, restore_logging):
        with patch.dict("os.environ", {"GHBRIDGE_LOG_LEVEL": "warning"}):
            setup_logging()
        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("ghbridge").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_explicit_level_wins(self, restore_logging):
        with patch.dict("os.environ", {"GHBRIDGE_LOG_LEVEL": "ERROR"}):
            setup_logging("debug")
        assert logging.getLogger("ghbridge").level == logging.DEBUG

    def test_json_renderer(self, restore_logging):
        with patch.dict("os.environ", {"GHBRIDGE_LOG_FORMAT": "json"}):
            setup_logging()
        formatter = logging.getLogger().handlers[0].formatter
        assert isinstance(formatter, structlog.stdlib.ProcessorFormatter)
        assert isinstance(formatter.processors[-1], structlog.processors.JSONRenderer)

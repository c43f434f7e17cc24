"""Tests for logging setup."""

import logging

import pytest
import structlog

from recordstore.logging import NOISY_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    levels = {name: logging.getLogger(name).level for name in ("recordstore", *NOISY_LOGGERS)}
    yield
    structlog.reset_defaults()
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.mark.parametrize(("debug", "level"), [(True, logging.DEBUG), (False, logging.INFO)])
    def test_application_level(self, debug, level):
        """Test that application loggers follow the debug flag."""
        setup_logging(debug)
        assert logging.getLogger("recordstore").level == level

    def test_pymongo_quieted(self):
        """Test that driver loggers only report warnings."""
        setup_logging(debug=True)
        assert all(logging.getLogger(name).level == logging.WARNING for name in NOISY_LOGGERS)

    def test_json_renderer_in_production(self):
        """Test that non-debug mode renders JSON lines."""
        setup_logging(debug=False)
        assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)

"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from confshift.config.logging import APP_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger(APP_LOGGER)
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger(APP_LOGGER).level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_default_is_warning(self) -> None:
        configure_logging()
        assert logging.getLogger(APP_LOGGER).level == logging.WARNING

    def test_quiet_only_errors(self) -> None:
        configure_logging(quiet=True)
        assert logging.getLogger(APP_LOGGER).level == logging.ERROR

    def test_verbose_wins_over_quiet(self) -> None:
        configure_logging(verbose=True, quiet=True)
        assert logging.getLogger(APP_LOGGER).level == logging.DEBUG

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("confshift.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "confshift.test"
        assert "timestamp" in parsed

    def test_domain_debug_lines_are_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        from confshift.domain.properties import parse_properties

        parse_properties("not a property")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "confshift.domain.properties"
        assert "not a property" in parsed["event"]

    def test_debug_hidden_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_json=True)
        logging.getLogger("confshift.domain.properties").debug("noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

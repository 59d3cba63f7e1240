"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from cadencectl.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("cadencectl")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("cadencectl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("cadencectl").level == logging.WARNING

    def test_json_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        structlog.get_logger("cadencectl.test").warning("json test", answer=42)
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "cadencectl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        logging.getLogger("cadencectl.services.schedule").debug("Dropped event: %s", "x")
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "Dropped event: x"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "cadencectl.services.schedule"

    def test_debug_suppressed_without_verbose(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=False, log_json=True, stream=stream)
        logging.getLogger("cadencectl.services.schedule").debug("quiet please")
        logging.getLogger("someotherlib").info("library noise")
        assert stream.getvalue() == ""

    def test_human_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=False, stream=stream)
        structlog.get_logger("cadencectl.test").warning("hello world", key="val")
        out = stream.getvalue()
        assert "hello world" in out
        assert "key" in out

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1

"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from postctl.config.logging import bind_content_root, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    post = logging.getLogger("postctl")
    post_level = post.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    post.setLevel(post_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("postctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("postctl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("postctl.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "postctl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_is_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("postctl.services.check").debug("lint %s", "done")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "lint done"
        assert parsed["level"] == "debug"

    def test_explicit_stream(self) -> None:
        buf = io.StringIO()
        configure_logging(verbose=False, log_json=True, stream=buf)
        logging.getLogger("postctl.infrastructure").warning("rollback failed")
        parsed = json.loads(buf.getvalue().strip())
        assert parsed["event"] == "rollback failed"

    def test_human_mode_plain_text(self) -> None:
        buf = io.StringIO()
        configure_logging(verbose=False, log_json=False, stream=buf)
        logging.getLogger("postctl").warning("plain line")
        output = buf.getvalue()
        assert "plain line" in output
        assert "\x1b" not in output
        assert not output.lstrip().startswith("{")


class TestBindContentRoot:
    def test_root_in_every_record(self) -> None:
        buf = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=buf)
        bind_content_root("/srv/blog")
        try:
            logging.getLogger("postctl.services").debug("loaded")
        finally:
            structlog.contextvars.clear_contextvars()
        assert json.loads(buf.getvalue().strip())["content_root"] == "/srv/blog"

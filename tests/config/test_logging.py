"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from poolctl.config.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pool = logging.getLogger("poolctl")
    pool_level = pool.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pool.setLevel(pool_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("poolctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("poolctl").level == logging.WARNING

    def test_azure_loggers_pinned(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("azure").level == logging.WARNING
        assert logging.getLogger("azure.identity").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("poolctl.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip().splitlines()[-1])
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42

    def test_stdlib_records_rendered(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("poolctl.services.pool").info("Applied elastic pool %s", "rg/srv/p")
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip().splitlines()[-1])
        assert parsed["event"] == "Applied elastic pool rg/srv/p"
        assert parsed["logger"] == "poolctl.services.pool"

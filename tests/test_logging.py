"""Tests for logger setup and the structured logger collaborator."""

from __future__ import annotations

import logging
from pathlib import Path

from workdir.core.logging import (
    NOTICE,
    NullLogger,
    StdlibLogger,
    StructuredLogger,
    get_logger,
    interpolate,
    reset_logger,
    setup_logging,
)


class TestSetupLogging:
    def test_setup_returns_logger(self):
        logger = setup_logging()
        assert isinstance(logger, logging.Logger)
        assert logger.name == "workdir"

    def test_setup_default_level(self):
        logger = setup_logging(log_level="INFO")
        assert logger.level == logging.INFO

    def test_setup_notice_level(self):
        logger = setup_logging(log_level="notice")
        assert logger.level == NOTICE

    def test_unknown_level_falls_back_to_info(self):
        logger = setup_logging(log_level="chatty")
        assert logger.level == logging.INFO

    def test_setup_with_file_handler(self, tmp_path: Path):
        logs_dir = tmp_path / "logs"
        logger = setup_logging(logs_dir=logs_dir)
        assert logs_dir.exists()
        # Should have console + file handler
        assert len(logger.handlers) == 2

    def test_setup_without_file_handler(self):
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_setup_idempotent(self):
        assert setup_logging() is setup_logging()

    def test_reset_logger(self):
        setup_logging()
        reset_logger()
        assert isinstance(get_logger(), logging.Logger)


class TestInterpolate:
    def test_placeholders_replaced(self):
        assert interpolate("Moved {count} file(s).", {"count": 3}) == "Moved 3 file(s)."

    def test_unknown_placeholder_kept(self):
        assert interpolate("{a} and {b}", {"a": 1}) == "1 and {b}"

    def test_no_context(self):
        assert interpolate("Directory created: {dir}.") == "Directory created: {dir}."


class TestStructuredLoggers:
    def test_protocol_conformance(self):
        assert isinstance(NullLogger(), StructuredLogger)
        assert isinstance(StdlibLogger(logging.getLogger("wdtest.proto")), StructuredLogger)

    def test_null_logger_returns_nothing(self):
        log = NullLogger()
        assert log.notice("x {a}", {"a": 1}) is None
        assert log.error("y") is None

    def test_stdlib_logger_levels_and_context(self, caplog):
        caplog.set_level(NOTICE, logger="wdtest.structured")
        log = StdlibLogger(logging.getLogger("wdtest.structured"))
        log.notice("Directory created: {dir}.", {"dir": "/tmp/x"})
        log.error('Failed to prepare directory "{directory}": {message}', {"directory": "/a", "message": "nope"})

        notice, err = caplog.records
        assert notice.levelno == NOTICE
        assert notice.levelname == "NOTICE"
        assert notice.getMessage() == "Directory created: /tmp/x."
        assert notice.context == {"dir": "/tmp/x"}
        assert err.levelno == logging.ERROR
        assert err.getMessage() == 'Failed to prepare directory "/a": nope'

    def test_stdlib_logger_writes_file(self, tmp_path: Path):
        logs_dir = tmp_path / "logs"
        log = StdlibLogger(setup_logging(log_level="NOTICE", logs_dir=logs_dir))
        log.notice("Moved {count} file(s).", {"count": 2})
        for handler in log.logger.handlers:
            handler.flush()
        content = (logs_dir / "workdir.log").read_text()
        assert "[NOTICE]" in content
        assert "Moved 2 file(s)." in content

    def test_default_logger_is_workdir(self):
        assert StdlibLogger().logger.name == "workdir"

"""Tests for kado_ai.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from kado_ai.logging import configure_logging, get_logger
from kado_ai.redaction import Redactor


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_get_logger_nests_under_package_logger() -> None:
    assert get_logger("pipeline").name == "kado_ai.pipeline"
    assert get_logger().name == "kado_ai"


def test_configure_logging_resets_handlers(tmp_path: Path) -> None:
    configure_logging()
    logger = configure_logging(verbose=True, log_file=tmp_path / "run.log")
    try:
        assert len(logger.handlers) == 2
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
    finally:
        _close_handlers(logger)


def test_scrubbing_filter_redacts_file_output(tmp_path: Path) -> None:
    log_file = tmp_path / "run.log"
    logger = configure_logging(log_file=log_file, scrub=Redactor().redact)
    try:
        get_logger("llm").error("backend replied: %s", 'password = "hunter2" from 10.9.8.7')
    finally:
        _close_handlers(logger)

    written = log_file.read_text(encoding="utf-8")
    assert "backend replied: password = [REDACTED] from [REDACTED]" in written
    assert "hunter2" not in written


def test_redaction_counts_survive_scrubbing(tmp_path: Path) -> None:
    log_file = tmp_path / "run.log"
    redactor = Redactor()
    logger = configure_logging(verbose=True, log_file=log_file, scrub=redactor.redact)
    try:
        redactor.redact_with_report('password = "a"\ntoken = "b"\n')
        get_logger("cli").info("token = %s", "leaked")
    finally:
        _close_handlers(logger)

    written = log_file.read_text(encoding="utf-8")
    assert "Redacted 2 values (generic_secret=2)" in written
    assert "token = [REDACTED]" in written
    assert "leaked" not in written

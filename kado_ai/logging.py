"""
Logging setup for kado-ai commands.

Handlers can carry a scrubbing filter that rewrites each formatted message
before it is emitted, so values echoed back by a backend error or a config
message pass through the same redaction rules as the prompt.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

_LOGGER_NAME = "kado_ai"
_CONSOLE_FORMAT = "[kado-ai] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

Scrubber = Callable[[str], str]

# Records logged with ``extra={SKIP_SCRUB: True}`` bypass the scrubbing filter.
SKIP_SCRUB = "kado_skip_scrub"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the kado_ai hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class ScrubbingFilter(logging.Filter):
    """Replaces a record's message with its scrubbed rendering."""

    def __init__(self, scrub: Scrubber) -> None:
        super().__init__()
        self._scrub = scrub

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, SKIP_SCRUB, False):
            return True
        record.msg = self._scrub(record.getMessage())
        record.args = None
        return True


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    scrub: Optional[Scrubber] = None,
) -> logging.Logger:
    """Configure the kado_ai logger with console output and an optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    handlers: List[logging.Handler] = [stream_handler]

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        if scrub is not None:
            handler.addFilter(ScrubbingFilter(scrub))
        logger.addHandler(handler)

    return logger


__all__ = ["SKIP_SCRUB", "ScrubbingFilter", "configure_logging", "get_logger"]

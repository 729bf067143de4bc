"""Logging configuration for TalentFit.

Everything logs through ``logging.getLogger(__name__)``, so module loggers sit
under the ``talentfit`` namespace and share the handlers installed here: one
stderr console handler, plus a per-run buffer the CLI saves next to its JSON
report as ``run.log``.
"""

import logging
import sys
from logging.handlers import MemoryHandler
from pathlib import Path

LOGGER_NAME = "talentfit"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

RUN_LOG_FILENAME = "run.log"

_configured = False


def _formatter(
    format_string: str = LOG_FORMAT, date_format: str = DATE_FORMAT
) -> logging.Formatter:
    return logging.Formatter(format_string, datefmt=date_format)


def configure_logging(
    level: str | None = None,
    format_string: str = LOG_FORMAT,
    date_format: str = DATE_FORMAT,
) -> logging.Logger:
    """Configure and return the ``talentfit`` application logger.

    Args:
        level: Log level name. Defaults to INFO; unknown names fall back to INFO.
        format_string: Format string for console messages.
        date_format: Format string for timestamps.

    Returns:
        The application logger.
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logger.setLevel(log_level)

    if _configured:
        for handler in logger.handlers:
            if isinstance(handler, logging.StreamHandler):
                handler.setLevel(log_level)
        return logger

    logger.handlers.clear()

    # Diagnostics on stderr, reports on stdout
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(_formatter(format_string, date_format))
    logger.addHandler(console_handler)

    logger.propagate = False
    _configured = True
    return logger


class RunLogBuffer:
    """Collect application log records for one CLI run.

    The run directory is only created once a command has valid input, so
    records are held in memory until ``write_to`` saves them to
    ``<run_dir>/run.log``. Records logged after ``write_to`` are not kept.
    """

    def __init__(self, capacity: int = 1000) -> None:
        # flushLevel above CRITICAL: never flush on severity, only on write_to
        self._handler = MemoryHandler(
            capacity, flushLevel=logging.CRITICAL + 1, flushOnClose=False
        )
        self._handler.setFormatter(_formatter())
        logging.getLogger(LOGGER_NAME).addHandler(self._handler)

    @property
    def pending(self) -> int:
        """Number of buffered records not yet written."""
        return len(self._handler.buffer)

    def write_to(self, run_dir: Path) -> Path:
        """Write buffered records to the run directory and stop buffering."""
        path = run_dir / RUN_LOG_FILENAME
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(self._handler.formatter)
        try:
            self._handler.setTarget(file_handler)
            self._handler.flush()
        finally:
            self._handler.setTarget(None)
            file_handler.close()
        self.close()
        return path

    def close(self) -> None:
        """Detach from the application logger, dropping anything unwritten."""
        logging.getLogger(LOGGER_NAME).removeHandler(self._handler)
        self._handler.buffer.clear()
        self._handler.close()


def reset_logging() -> None:
    """Reset logging configuration (useful for testing)."""
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

    _configured = False

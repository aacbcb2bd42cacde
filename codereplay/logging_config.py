"""
Structured logging configuration for CodeReplay.

Provides JSON-formatted logs with trace_id support for correlating all log
lines of one replay run (the trace_id is the replayed log's fingerprint).

Environment Variables:
    CODEREPLAY_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    CODEREPLAY_LOG_FORMAT: Log format (json, text) - default: text

Usage:
    from codereplay.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id=log.fingerprint())
    logger.info("Replaying", extra={"events": len(log)})
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all logs have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """
    Configure root logger with structured logging.

    Arguments override CODEREPLAY_LOG_LEVEL / CODEREPLAY_LOG_FORMAT.
    Logs go to stderr so stdout stays clean for --json output.
    """
    log_level = (level or os.getenv("CODEREPLAY_LOG_LEVEL", "INFO")).upper()
    log_format = (fmt or os.getenv("CODEREPLAY_LOG_FORMAT", "text")).lower()

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    resolved = level_map.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.addFilter(TraceIDFilter())

    if log_format == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Trace ID for correlating logs (typically the log fingerprint)
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})

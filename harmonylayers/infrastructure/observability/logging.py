"""Logging utilities for harmonylayers.

This module provides centralised logging configuration and helpers for
contextual logging during a migration run.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator


# ---------------------------------------------------------------------------
# Context variables for structured logging
# ---------------------------------------------------------------------------

_log_context: ContextVar[dict[str, Any]] = ContextVar(
    "log_context", default={})

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ContextualFormatter(logging.Formatter):
    """Formatter that appends context fields to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = _log_context.get()
        if not ctx:
            return super().format(record)
        ctx_str = " ".join(f"{k}={v}" for k, v in ctx.items())
        # format a copy so other handlers see the original message
        record = logging.makeLogRecord(record.__dict__)
        record.msg = f"{record.getMessage()} [{ctx_str}]"
        record.args = None
        return super().format(record)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Temporarily add context fields to all log messages.

    Usage::

        with log_context(miner_repo="~/.lotusminer", layer="mig1"):
            logger.info("Inserting layer")  # message includes context

    Fields are merged with any existing context and restored on exit.
    """
    current = _log_context.get()
    merged = {**current, **fields}
    token = _log_context.set(merged)
    try:
        yield
    finally:
        _log_context.reset(token)


# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

_configured = False


def configure_logging(
    level: int = logging.INFO,
    third_party_level: int = logging.WARNING,
) -> None:
    """Configure application-wide logging.

    Call this once at startup (CLI group entry) to set up consistent logging
    across the application. Later calls are ignored.

    Args:
        level: Log level for application loggers (default INFO).
        third_party_level: Log level for third-party libraries (default WARNING).
    """
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any existing handlers to avoid duplicates
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ContextualFormatter(_FORMAT))
    root.addHandler(handler)

    # Quieten noisy third-party loggers
    for name in ("urllib3", "requests", "charset_normalizer"):
        logging.getLogger(name).setLevel(third_party_level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given name.

    No handlers are attached here; output is set up once by
    configure_logging() so every record is emitted exactly once.

    Args:
        name: Name of the logger (typically __name__).

    Returns:
        A logging.Logger instance.
    """
    return logging.getLogger(name)


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """Log an exception with context fields.

    Args:
        logger: Logger instance.
        message: Human-readable message describing the error.
        exc: The exception that was raised.
        **context: Additional context fields to include.
    """
    with log_context(**context):
        logger.exception(f"{message}: {exc}")

"""Logging for sqlforge.

Every module logs through a child of the ``sqlforge`` logger. Builder events
carry structured fields (statement kind, parameter and entry counts) that
:class:`StructuredFormatter` writes out as JSON next to the message.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

import msgspec

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import TextIO

__all__ = (
    "ROOT_LOGGER_NAME",
    "CorrelationIDFilter",
    "StructuredFormatter",
    "configure_logging",
    "correlation_id_var",
    "get_correlation_id",
    "get_logger",
    "log_with_context",
    "set_correlation_id",
)

ROOT_LOGGER_NAME = "sqlforge"

correlation_id_var: ContextVar[str | None] = ContextVar("sqlforge_correlation_id", default=None)

_encoder = msgspec.json.Encoder(enc_hook=str)


def set_correlation_id(correlation_id: str | None) -> None:
    """Tag log records emitted in the current context with ``correlation_id``."""
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> str | None:
    return correlation_id_var.get()


class CorrelationIDFilter(logging.Filter):
    """Copy the context's correlation ID onto each record as ``correlation_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            record.correlation_id = correlation_id  # type: ignore[attr-defined]
        return True


class StructuredFormatter(logging.Formatter):
    """Format records as one JSON object per line.

    The object holds the timestamp, level, logger name, message and source
    location, then the correlation ID and any ``extra_fields`` attached by
    :func:`log_with_context`, then the formatted exception if there is one.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        correlation_id = getattr(record, "correlation_id", None) or get_correlation_id()
        if correlation_id is not None:
            payload["correlation_id"] = correlation_id
        payload.update(getattr(record, "extra_fields", {}))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return _encoder.encode(payload).decode()


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``sqlforge`` or its child ``sqlforge.<name>``.

    Args:
        name: Dotted name below the ``sqlforge`` namespace. A name that
            already starts with ``sqlforge`` is used as-is.

    Returns:
        The logger, with a :class:`CorrelationIDFilter` attached.
    """
    if name is None:
        logger_name = ROOT_LOGGER_NAME
    elif name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        logger_name = name
    else:
        logger_name = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(logger_name)
    if not any(isinstance(existing, CorrelationIDFilter) for existing in logger.filters):
        logger.addFilter(CorrelationIDFilter())
    return logger


def configure_logging(
    level: int | str = logging.INFO,
    *,
    structured: bool = True,
    stream: TextIO | None = None,
    handlers: Iterable[logging.Handler] = (),
) -> logging.Logger:
    """Send sqlforge's records to ``stream`` instead of the root logger.

    Replaces any handlers installed by an earlier call and stops propagation.

    Args:
        level: Level name or number for the ``sqlforge`` logger.
        structured: Write JSON through :class:`StructuredFormatter`; otherwise plain text.
        stream: Output stream, ``sys.stderr`` by default.
        handlers: Additional handlers, attached unchanged.

    Returns:
        The configured ``sqlforge`` logger.
    """
    logger = get_logger()
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    logger.handlers.clear()

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(
        StructuredFormatter() if structured else logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(stream_handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = False

    log_with_context(logger, logging.DEBUG, "sqlforge logging configured", structured=structured)
    return logger


def log_with_context(logger: logging.Logger, level: int, message: str, **fields: Any) -> None:
    """Log ``message`` with ``fields`` attached as structured ``extra_fields``.

    The record reports the caller's source location.
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"extra_fields": fields}, stacklevel=2)

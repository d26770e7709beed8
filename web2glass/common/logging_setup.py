"""
Process logging configuration helpers.

This module owns runtime logging setup, including version-tagged formatting,
optional file handler wiring, and the optional file sink of the diagnostic
event log.
"""

from __future__ import annotations

import logging

from web2glass import __version__
from web2glass.common.event_log import EVENT_LOGGER_NAME

__all__ = [
    "logging_setup",
    "logFormatWithVersion_get",
    "eventLogFile_attach",
]


def logging_setup(level: str, log_format: str, log_file: str | None) -> None:
    """
    Configure logging handlers and version-tagged format string.

    Args:
        level:
            Effective log level token (for example `INFO` or `DEBUG`).
        log_format:
            Base formatter string.
        log_file:
            Optional log file path.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    enhanced_format: str = logFormatWithVersion_get(log_format)
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=enhanced_format,
        handlers=handlers,
    )


def logFormatWithVersion_get(log_format: str) -> str:
    """
    Inject runtime version tag into timestamped log format.

    Args:
        log_format:
            Base formatter string.

    Returns:
        Formatter string with embedded version token.
    """
    return log_format.replace("%(asctime)s", f"%(asctime)s [v{__version__}]")


def eventLogFile_attach(event_log_file: str | None) -> logging.Handler | None:
    """
    Append diagnostic event-log lines to a dedicated file.

    Args:
        event_log_file:
            Optional file path; `None` leaves the event logger untouched.

    Returns:
        Attached handler, or `None`.
    """
    if not event_log_file:
        return None
    handler: logging.Handler = logging.FileHandler(event_log_file, mode="a")
    handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
    logging.getLogger(EVENT_LOGGER_NAME).addHandler(handler)
    return handler

"""
Append-only diagnostic event log.

Every app appends short human-readable lines here (connect requests, mode
changes, bridge events, request results). Lines are kept in a bounded
in-memory history for the local panel and forwarded to the
`web2glass.events` logger, which `logging_setup.eventLogFile_attach` can
route to a file.
"""

from __future__ import annotations

import logging
from collections import deque

__all__ = ["EVENT_LOGGER_NAME", "EventLog"]

EVENT_LOGGER_NAME: str = "web2glass.events"

_event_logger = logging.getLogger(EVENT_LOGGER_NAME)


class EventLog:
    """Bounded, append-only history of diagnostic lines."""

    def __init__(self, max_entries: int = 200) -> None:
        """
        Initialize empty history.

        Args:
            max_entries:
                Number of most recent lines retained in memory.
        """
        self._entries: deque[str] = deque(maxlen=max(1, max_entries))

    def append(self, message: str) -> None:
        """
        Record one diagnostic line.

        Args:
            message:
                Line to record.
        """
        self._entries.append(message)
        _event_logger.info("%s", message)

    def entries_get(self) -> list[str]:
        """Return retained lines, oldest first."""
        return list(self._entries)

    def last_get(self) -> str | None:
        """Return most recent line, or `None` when empty."""
        if not self._entries:
            return None
        return self._entries[-1]

    def __len__(self) -> int:
        return len(self._entries)

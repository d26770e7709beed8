"""Local control panel surface"""

from __future__ import annotations

from typing import Mapping, Optional, TextIO


class PanelSurface:
    """
    In-process stand-in for the browser control panel.

    Keeps the last written field set; optionally echoes changed field sets to
    a text stream so a terminal session can follow the panel.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        """
        Initialize empty panel.

        Args:
            stream: Optional stream receiving a line per changed field set.
        """
        self.fields: dict[str, str] = {}
        self.write_count: int = 0
        self._stream: Optional[TextIO] = stream

    def fields_write(self, fields: Mapping[str, str]) -> None:
        """
        Replace all visible fields.

        Args:
            fields: Field label to display value.
        """
        changed: bool = dict(fields) != self.fields
        self.fields = dict(fields)
        self.write_count += 1
        if changed and self._stream is not None:
            self._stream.write(self.line_format() + "\n")
            self._stream.flush()

    def field_get(self, label: str) -> Optional[str]:
        """Current value of one field"""
        return self.fields.get(label)

    def line_format(self) -> str:
        """Single-line rendering of the panel"""
        return " | ".join(f"{label}: {value}" for label, value in self.fields.items())

"""Common types and data structures for web2glass"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping, Optional

RawEvent = Mapping[str, Any]

UNRESOLVED_INDEX: int = -1


class CanonicalEvent(Enum):
    """Normalized bridge event kinds"""
    CLICK = "click"
    DOUBLE_CLICK = "double-click"
    SCROLL_UP = "scroll-up"
    SCROLL_DOWN = "scroll-down"
    UNKNOWN = "unknown"


class SurfaceMode(Enum):
    """Remote surface availability"""
    BRIDGE = "bridge"  # Live bridge handle held
    MOCK = "mock"      # No bridge, remote operations are no-ops


def index_clamp(index: int, length: int) -> int:
    """
    Clamp a selection index into [0, length - 1].

    Args:
        index: Proposed index.
        length: Option list length.

    Returns:
        Clamped index; 0 for an empty list.
    """
    if length <= 0:
        return 0
    return max(0, min(length - 1, index))


class OptionList:
    """Ordered, label-unique option list; positions define selection indices"""

    def __init__(self, labels: Optional[list[str]] = None) -> None:
        """
        Initialize list, dropping blanks and duplicates.

        Args:
            labels: Initial labels in display order.
        """
        self._labels: list[str] = []
        for label in labels or []:
            self.add(label)

    def add(self, label: str) -> bool:
        """
        Append a label.

        Args:
            label: Label to add (trimmed).

        Returns:
            True when the label was appended.
        """
        trimmed: str = label.strip()
        if not trimmed or trimmed in self._labels:
            return False
        self._labels.append(trimmed)
        return True

    def remove(self, label: str) -> int:
        """
        Remove a label.

        Args:
            label: Label to remove.

        Returns:
            Position the label occupied, or -1 if absent.
        """
        try:
            position: int = self._labels.index(label)
        except ValueError:
            return UNRESOLVED_INDEX
        del self._labels[position]
        return position

    def index_of(self, label: str) -> int:
        """Position of label, or -1"""
        try:
            return self._labels.index(label)
        except ValueError:
            return UNRESOLVED_INDEX

    def labels_get(self) -> list[str]:
        """Copy of labels in order"""
        return list(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._labels))

    def __getitem__(self, index: int) -> str:
        return self._labels[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptionList):
            return NotImplemented
        return self._labels == other._labels

    def __repr__(self) -> str:
        return f"OptionList({self._labels!r})"


@dataclass
class ApplicationState:
    """
    Single authoritative application record.

    Both surfaces are rendered from one instance of this class. It is mutated
    only by the state reconciler and the local-action path.
    """

    options: OptionList = field(default_factory=OptionList)
    selected_index: int = 0
    last_event: str = "none"
    status_message: str = ""

    def selection_set(self, index: int) -> int:
        """
        Set selection, clamped to the option list.

        Args:
            index: Proposed index.

        Returns:
            Applied index.
        """
        self.selected_index = index_clamp(index, len(self.options))
        return self.selected_index

    def selection_clamp(self) -> int:
        """Re-clamp selection after the option list changed length"""
        return self.selection_set(self.selected_index)

    def selectedLabel_get(self) -> Optional[str]:
        """Label at current selection, or None for an empty list"""
        if len(self.options) == 0:
            return None
        return self.options[index_clamp(self.selected_index, len(self.options))]


@dataclass(frozen=True)
class EventOutcome:
    """Result of applying one bridge event to the state"""
    kind: CanonicalEvent
    resolved_index: int
    previous_index: int
    selected_index: int
    implicit_list: bool = False  # UNKNOWN kind on a list payload

    @property
    def implicit_fallback(self) -> bool:
        """Implicit list path with nothing resolved (row 0 assumed)"""
        return self.implicit_list and self.resolved_index == UNRESOLVED_INDEX

    def selectionChanged_check(self) -> bool:
        """Check if the event moved the selection"""
        return self.previous_index != self.selected_index

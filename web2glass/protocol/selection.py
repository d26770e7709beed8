"""
Selection index resolution from raw bridge payloads.

Precedence, first hit wins:

1. structured `listEvent` index, when in range
2. loose `jsonData` index, when in range
3. exact case-insensitive name match against the rendered labels
4. case-insensitive prefix match, first by list order: the incoming name as
   a prefix of a label, then a label as a prefix of the incoming name
5. UNRESOLVED_INDEX
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional, Sequence

from web2glass.common.types import UNRESOLVED_INDEX, RawEvent, index_clamp
from web2glass.protocol.decoder import rawSelectionIndex_get, rawSelectionName_get

__all__ = [
    "index_parse",
    "name_normalize",
    "indexByName_find",
    "selectionIndex_resolve",
]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def index_parse(value: Any) -> Optional[int]:
    """
    Parse a raw index value.

    Args:
        value: int, float, or numeric string (leading integer is used).

    Returns:
        Parsed index, or None when unparseable.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match is None:
            return None
        return int(match.group(1))
    return None


def name_normalize(value: Any) -> str:
    """Trimmed lowercase name, or empty string for non-strings"""
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def indexByName_find(name: str, labels: Sequence[str]) -> int:
    """
    Match a normalized name against labels.

    Args:
        name: Normalized (trimmed, lowercase) incoming name.
        labels: Labels in display order.

    Returns:
        Matching index, or UNRESOLVED_INDEX.
    """
    if not name:
        return UNRESOLVED_INDEX

    lowered: list[str] = [label.lower() for label in labels]
    for index, label in enumerate(lowered):
        if label == name:
            return index
    for index, label in enumerate(lowered):
        if label.startswith(name):
            return index
    for index, label in enumerate(lowered):
        if label and name.startswith(label):
            return index
    return UNRESOLVED_INDEX


def selectionIndex_resolve(raw: RawEvent, labels: Sequence[str]) -> int:
    """
    Resolve the selection index a raw event refers to.

    Args:
        raw: Raw bridge payload.
        labels: Labels currently rendered on the glasses list.

    Returns:
        Index in [0, len(labels) - 1], or UNRESOLVED_INDEX.
    """
    length: int = len(labels)
    if length == 0:
        return UNRESOLVED_INDEX

    structured_index, loose_index = rawSelectionIndex_get(raw)
    for candidate in (structured_index, loose_index):
        parsed: Optional[int] = index_parse(candidate)
        if parsed is not None and 0 <= parsed < length:
            return index_clamp(parsed, length)

    structured_name, loose_name = rawSelectionName_get(raw)
    incoming_name: str = name_normalize(structured_name) or name_normalize(loose_name)
    by_name: int = indexByName_find(incoming_name, labels)
    if by_name != UNRESOLVED_INDEX:
        return index_clamp(by_name, length)

    return UNRESOLVED_INDEX

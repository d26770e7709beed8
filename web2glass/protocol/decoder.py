"""
Raw bridge event field extraction.

The glasses bridge reports the same logical field under several names
depending on the event source (list, text, or system container events) and
on the JSON producer (camelCase, snake_case, or capitalised keys). Each
logical field is described here as an ordered tuple of named extractors.
Lookup folds "first present wins" over that tuple, so the order encodes the
precedence of structured sub-event fields over loosely-typed JSON fallbacks.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from web2glass.common.types import RawEvent

__all__ = [
    "FieldExtractor",
    "EVENT_TYPE_EXTRACTORS",
    "STRUCTURED_INDEX_EXTRACTORS",
    "LOOSE_INDEX_EXTRACTORS",
    "STRUCTURED_NAME_EXTRACTORS",
    "LOOSE_NAME_EXTRACTORS",
    "firstPresent_get",
    "rawEventType_get",
    "rawSelectionIndex_get",
    "rawSelectionName_get",
    "listPayload_check",
    "jsonData_get",
]


@dataclass(frozen=True)
class FieldExtractor:
    """Named accessor for one alias of a logical payload field."""

    name: str
    read: Callable[[RawEvent], Any]

    def value_get(self, raw: RawEvent) -> Any:
        """
        Read alias value from payload.

        Args:
            raw: Raw bridge payload.

        Returns:
            Alias value, or None when absent or unreadable.
        """
        try:
            return self.read(raw)
        except (AttributeError, TypeError, KeyError):
            return None


def _mapping_get(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key)
    return None


def jsonData_get(raw: RawEvent) -> Mapping[str, Any]:
    """
    Return the loosely-typed JSON object attached to an event.

    Args:
        raw: Raw bridge payload.

    Returns:
        `jsonData` as a mapping; JSON strings are decoded; anything else is
        treated as an empty object.
    """
    value: Any = _mapping_get(raw, "jsonData")
    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value)
        except ValueError:
            return {}
    if isinstance(value, Mapping):
        return value
    return {}


def _subEvent(key: str, field_name: str) -> FieldExtractor:
    return FieldExtractor(
        name=f"{key}.{field_name}",
        read=lambda raw: _mapping_get(_mapping_get(raw, key), field_name),
    )


def _topLevel(field_name: str) -> FieldExtractor:
    return FieldExtractor(name=field_name, read=lambda raw: _mapping_get(raw, field_name))


def _jsonField(field_name: str) -> FieldExtractor:
    return FieldExtractor(
        name=f"jsonData.{field_name}",
        read=lambda raw: jsonData_get(raw).get(field_name),
    )


EVENT_TYPE_EXTRACTORS: tuple[FieldExtractor, ...] = (
    _subEvent("listEvent", "eventType"),
    _subEvent("textEvent", "eventType"),
    _subEvent("sysEvent", "eventType"),
    _topLevel("eventType"),
    _jsonField("eventType"),
    _jsonField("event_type"),
    _jsonField("Event_Type"),
    _jsonField("type"),
)

STRUCTURED_INDEX_EXTRACTORS: tuple[FieldExtractor, ...] = (
    _subEvent("listEvent", "currentSelectItemIndex"),
)

LOOSE_INDEX_EXTRACTORS: tuple[FieldExtractor, ...] = (
    _jsonField("currentSelectItemIndex"),
    _jsonField("current_select_item_index"),
    _jsonField("currentSelectedIndex"),
    _jsonField("current_selected_index"),
)

STRUCTURED_NAME_EXTRACTORS: tuple[FieldExtractor, ...] = (
    _subEvent("listEvent", "currentSelectItemName"),
)

LOOSE_NAME_EXTRACTORS: tuple[FieldExtractor, ...] = (
    _jsonField("currentSelectItemName"),
    _jsonField("current_select_item_name"),
    _jsonField("currentSelectedName"),
    _jsonField("current_selected_name"),
)


def firstPresent_get(raw: RawEvent, extractors: tuple[FieldExtractor, ...]) -> Any:
    """
    Fold extractors in order and return the first non-None value.

    Args:
        raw: Raw bridge payload.
        extractors: Ordered alias extractors.

    Returns:
        First present value, or None.
    """
    if not isinstance(raw, Mapping):
        return None
    for extractor in extractors:
        value: Any = extractor.value_get(raw)
        if value is not None:
            return value
    return None


def rawEventType_get(raw: RawEvent) -> Any:
    """Raw event-type value (int, str, or anything the bridge sent)."""
    return firstPresent_get(raw, EVENT_TYPE_EXTRACTORS)


def rawSelectionIndex_get(raw: RawEvent) -> tuple[Any, Any]:
    """
    Raw selection index candidates.

    Returns:
        (structured index, loose JSON index), each possibly None.
    """
    return (
        firstPresent_get(raw, STRUCTURED_INDEX_EXTRACTORS),
        firstPresent_get(raw, LOOSE_INDEX_EXTRACTORS),
    )


def rawSelectionName_get(raw: RawEvent) -> tuple[Any, Any]:
    """
    Raw selection name candidates.

    Returns:
        (structured name, loose JSON name), each possibly None.
    """
    return (
        firstPresent_get(raw, STRUCTURED_NAME_EXTRACTORS),
        firstPresent_get(raw, LOOSE_NAME_EXTRACTORS),
    )


def listPayload_check(raw: RawEvent) -> bool:
    """
    Check whether a payload looks like a list-selection event.

    A payload qualifies when it carries a `listEvent` object (even an empty
    one) or list selection fields inside `jsonData`.

    Args:
        raw: Raw bridge payload.

    Returns:
        True for list-style payloads.
    """
    if not isinstance(raw, Mapping):
        return False
    if isinstance(raw.get("listEvent"), Mapping):
        return True
    loose: Optional[Any] = firstPresent_get(raw, LOOSE_INDEX_EXTRACTORS + LOOSE_NAME_EXTRACTORS)
    return loose is not None

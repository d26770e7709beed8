"""Raw event-type normalization into canonical event kinds"""

from typing import Any

from web2glass.common.types import CanonicalEvent

__all__ = ["EVENT_CODE_TABLE", "eventType_normalize", "eventLabel_get"]

# Bridge numeric convention
EVENT_CODE_TABLE: dict[int, CanonicalEvent] = {
    0: CanonicalEvent.CLICK,
    1: CanonicalEvent.SCROLL_UP,
    2: CanonicalEvent.SCROLL_DOWN,
    3: CanonicalEvent.DOUBLE_CLICK,
}


def eventType_normalize(raw_value: Any) -> CanonicalEvent:
    """
    Map a raw event-type value onto a canonical event kind.

    Strings are matched case-insensitively by substring. DOUBLE is checked
    before CLICK so that "DOUBLE_CLICK_EVENT" never reads as a single click.

    Args:
        raw_value: Value from the decoder (int, str, or anything else).

    Returns:
        Canonical event kind; UNKNOWN when nothing matches.
    """
    if isinstance(raw_value, bool):
        return CanonicalEvent.UNKNOWN

    if isinstance(raw_value, int):
        return EVENT_CODE_TABLE.get(raw_value, CanonicalEvent.UNKNOWN)

    if isinstance(raw_value, str):
        value = raw_value.upper()
        if "DOUBLE" in value:
            return CanonicalEvent.DOUBLE_CLICK
        if "CLICK" in value:
            return CanonicalEvent.CLICK
        if "SCROLL_TOP" in value or "UP" in value:
            return CanonicalEvent.SCROLL_UP
        if "SCROLL_BOTTOM" in value or "DOWN" in value:
            return CanonicalEvent.SCROLL_DOWN

    return CanonicalEvent.UNKNOWN


def eventLabel_get(kind: CanonicalEvent) -> str:
    """Short display label for an event kind"""
    return kind.value

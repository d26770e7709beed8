"""Unit tests for event type normalization"""

import pytest

from web2glass.common.types import CanonicalEvent
from web2glass.protocol.normalizer import eventLabel_get, eventType_normalize


class TestNumericCodes:
    """Bridge numeric convention"""

    @pytest.mark.parametrize(
        "code,expected",
        [
            (0, CanonicalEvent.CLICK),
            (1, CanonicalEvent.SCROLL_UP),
            (2, CanonicalEvent.SCROLL_DOWN),
            (3, CanonicalEvent.DOUBLE_CLICK),
            (4, CanonicalEvent.UNKNOWN),
            (-1, CanonicalEvent.UNKNOWN),
        ],
    )
    def test_code_table(self, code, expected):
        assert eventType_normalize(code) == expected

    def test_bool_is_not_a_code(self):
        assert eventType_normalize(True) == CanonicalEvent.UNKNOWN
        assert eventType_normalize(False) == CanonicalEvent.UNKNOWN


class TestStringNames:
    """Case-insensitive substring matching"""

    def test_double_click_is_not_a_click(self):
        assert eventType_normalize("DOUBLE_CLICK_EVENT") == CanonicalEvent.DOUBLE_CLICK

    def test_click(self):
        assert eventType_normalize("click_event") == CanonicalEvent.CLICK

    def test_scroll_top_and_up(self):
        assert eventType_normalize("SCROLL_TOP_EVENT") == CanonicalEvent.SCROLL_UP
        assert eventType_normalize("up") == CanonicalEvent.SCROLL_UP

    def test_scroll_bottom_and_down(self):
        assert eventType_normalize("SCROLL_BOTTOM_EVENT") == CanonicalEvent.SCROLL_DOWN
        assert eventType_normalize("Down") == CanonicalEvent.SCROLL_DOWN

    def test_unmatched(self):
        assert eventType_normalize("FOREGROUND_ENTER") == CanonicalEvent.UNKNOWN


def test_other_values_are_unknown():
    assert eventType_normalize(None) == CanonicalEvent.UNKNOWN
    assert eventType_normalize(1.0) == CanonicalEvent.UNKNOWN
    assert eventType_normalize({"type": 0}) == CanonicalEvent.UNKNOWN


def test_event_label():
    assert eventLabel_get(CanonicalEvent.SCROLL_DOWN) == "scroll-down"

"""Unit tests for selection index resolution"""

from web2glass.common.types import UNRESOLVED_INDEX
from web2glass.protocol.selection import (
    index_parse,
    indexByName_find,
    name_normalize,
    selectionIndex_resolve,
)

THEMES = ["Blue", "Green", "Orange"]


class TestIndexParse:
    """Raw index parsing"""

    def test_int(self):
        assert index_parse(2) == 2

    def test_float_truncates(self):
        assert index_parse(1.9) == 1

    def test_non_finite_float(self):
        assert index_parse(float("nan")) is None
        assert index_parse(float("inf")) is None

    def test_leading_integer_string(self):
        assert index_parse(" 2abc") == 2
        assert index_parse("-1") == -1

    def test_unparseable(self):
        assert index_parse("abc") is None
        assert index_parse(None) is None
        assert index_parse(True) is None


class TestNameMatching:
    """Exact then prefix matching"""

    def test_normalize(self):
        assert name_normalize("  GrEeN ") == "green"
        assert name_normalize(3) == ""

    def test_exact_beats_prefix(self):
        labels = ["Greenish", "Green"]
        assert indexByName_find("green", labels) == 1

    def test_name_is_prefix_of_label(self):
        assert indexByName_find("ora", THEMES) == 2

    def test_label_is_prefix_of_name(self):
        assert indexByName_find("blue sky", THEMES) == 0

    def test_no_match(self):
        assert indexByName_find("purple", THEMES) == UNRESOLVED_INDEX
        assert indexByName_find("", THEMES) == UNRESOLVED_INDEX


class TestResolve:
    """Full precedence chain"""

    def test_structured_index_first(self):
        raw = {
            "listEvent": {"currentSelectItemIndex": 1, "currentSelectItemName": "Orange"},
            "jsonData": {"currentSelectItemIndex": 0},
        }
        assert selectionIndex_resolve(raw, THEMES) == 1

    def test_out_of_range_structured_falls_to_loose(self):
        raw = {
            "listEvent": {"currentSelectItemIndex": 9},
            "jsonData": {"currentSelectItemIndex": "2"},
        }
        assert selectionIndex_resolve(raw, THEMES) == 2

    def test_index_beats_name(self):
        raw = {"jsonData": {"currentSelectItemIndex": 0, "currentSelectItemName": "Orange"}}
        assert selectionIndex_resolve(raw, THEMES) == 0

    def test_structured_name(self):
        raw = {"listEvent": {"currentSelectItemName": " orange "}}
        assert selectionIndex_resolve(raw, THEMES) == 2

    def test_loose_name_when_structured_blank(self):
        raw = {
            "listEvent": {"currentSelectItemName": "   "},
            "jsonData": {"current_selected_name": "green"},
        }
        assert selectionIndex_resolve(raw, THEMES) == 1

    def test_unresolved(self):
        assert selectionIndex_resolve({"eventType": 0}, THEMES) == UNRESOLVED_INDEX

    def test_empty_labels(self):
        raw = {"listEvent": {"currentSelectItemIndex": 0}}
        assert selectionIndex_resolve(raw, []) == UNRESOLVED_INDEX

    def test_result_always_in_range(self):
        for value in (-5, -1, 0, 1, 2, 3, 100, "7", 2.5):
            resolved = selectionIndex_resolve({"listEvent": {"currentSelectItemIndex": value}}, THEMES)
            assert resolved == UNRESOLVED_INDEX or 0 <= resolved < len(THEMES)

"""Unit tests for shared state types"""

from web2glass.common.types import (
    UNRESOLVED_INDEX,
    ApplicationState,
    CanonicalEvent,
    EventOutcome,
    OptionList,
    index_clamp,
)


class TestIndexClamp:
    """Selection clamping"""

    def test_in_range(self):
        assert index_clamp(1, 3) == 1

    def test_bounds(self):
        assert index_clamp(-4, 3) == 0
        assert index_clamp(9, 3) == 2

    def test_empty_list(self):
        assert index_clamp(5, 0) == 0


class TestOptionList:
    """Ordered unique labels"""

    def test_add_trims_and_rejects_duplicates(self):
        options = OptionList()
        assert options.add("  http://a  ") is True
        assert options.add("http://a") is False
        assert options.add("   ") is False
        assert options.labels_get() == ["http://a"]

    def test_initial_labels_are_deduplicated(self):
        options = OptionList(["Blue", "Blue", "Green"])
        assert list(options) == ["Blue", "Green"]

    def test_remove_returns_position(self):
        options = OptionList(["a", "b", "c"])
        assert options.remove("b") == 1
        assert options.labels_get() == ["a", "c"]
        assert options.remove("zzz") == UNRESOLVED_INDEX

    def test_add_then_remove_restores_list(self):
        options = OptionList(["a", "b"])
        options.add("c")
        options.remove("c")
        assert options == OptionList(["a", "b"])

    def test_labels_get_returns_copy(self):
        options = OptionList(["a"])
        options.labels_get().append("b")
        assert len(options) == 1


class TestApplicationState:
    """Selection helpers"""

    def test_selection_set_clamps(self):
        state = ApplicationState(options=OptionList(["a", "b"]))
        assert state.selection_set(5) == 1
        assert state.selection_set(-1) == 0

    def test_selection_clamp_after_shrink(self):
        state = ApplicationState(options=OptionList(["a", "b", "c"]), selected_index=2)
        state.options.remove("c")
        assert state.selection_clamp() == 1

    def test_selected_label_empty(self):
        assert ApplicationState().selectedLabel_get() is None

    def test_defaults(self):
        state = ApplicationState()
        assert state.selected_index == 0
        assert state.last_event == "none"


class TestEventOutcome:
    """Outcome helpers"""

    def test_selection_changed(self):
        outcome = EventOutcome(
            kind=CanonicalEvent.SCROLL_DOWN, resolved_index=-1, previous_index=0, selected_index=1
        )
        assert outcome.selectionChanged_check() is True

    def test_implicit_fallback(self):
        outcome = EventOutcome(
            kind=CanonicalEvent.UNKNOWN,
            resolved_index=UNRESOLVED_INDEX,
            previous_index=2,
            selected_index=0,
            implicit_list=True,
        )
        assert outcome.implicit_fallback is True

"""Unit tests for the state reconciler rule table"""

import pytest

from web2glass.common.types import (
    UNRESOLVED_INDEX,
    ApplicationState,
    CanonicalEvent,
    OptionList,
)
from web2glass.engine.reconciler import StateReconciler


@pytest.fixture
def state() -> ApplicationState:
    return ApplicationState(options=OptionList(["Blue", "Green", "Orange"]))


@pytest.fixture
def reconciler(state: ApplicationState) -> StateReconciler[ApplicationState]:
    return StateReconciler(state)


class TestBridgeEvents:
    """Raw payload application"""

    def test_scroll_down_with_structured_index(self, reconciler, state):
        outcome = reconciler.rawEvent_apply(
            {"listEvent": {"eventType": 2, "currentSelectItemIndex": 1}}
        )
        assert outcome.kind == CanonicalEvent.SCROLL_DOWN
        assert state.selected_index == 1
        assert state.last_event == "glasses: scroll-down"
        assert outcome.selectionChanged_check() is True

    def test_scroll_up_without_index_steps_back(self, reconciler, state):
        state.selected_index = 2
        reconciler.rawEvent_apply({"eventType": "SCROLL_TOP_EVENT"})
        assert state.selected_index == 1

    def test_scroll_up_at_top_clamps(self, reconciler, state):
        outcome = reconciler.rawEvent_apply({"eventType": 1})
        assert state.selected_index == 0
        assert outcome.selectionChanged_check() is False

    def test_scroll_down_at_bottom_clamps(self, reconciler, state):
        state.selected_index = 2
        reconciler.rawEvent_apply({"eventType": 2})
        assert state.selected_index == 2

    def test_click_without_index_selects_first_row(self, reconciler, state):
        state.selected_index = 2
        outcome = reconciler.rawEvent_apply({"listEvent": {"eventType": 0}})
        assert state.selected_index == 0
        assert outcome.kind == CanonicalEvent.CLICK
        assert state.last_event == "glasses: click"

    def test_click_by_name(self, reconciler, state):
        reconciler.rawEvent_apply({"listEvent": {"eventType": 0, "currentSelectItemName": "orange"}})
        assert state.selected_index == 2

    def test_unknown_list_payload_without_selection_falls_back(self, reconciler, state):
        state.selected_index = 2
        outcome = reconciler.rawEvent_apply({"listEvent": {}})
        assert state.selected_index == 0
        assert outcome.implicit_fallback is True
        assert state.last_event == "glasses: list-fallback -> Blue"

    def test_unknown_list_payload_with_name_selects(self, reconciler, state):
        outcome = reconciler.rawEvent_apply({"jsonData": {"currentSelectItemName": "Green"}})
        assert state.selected_index == 1
        assert outcome.implicit_list is True
        assert outcome.implicit_fallback is False
        assert state.last_event == "glasses: list-select -> Green"

    def test_double_click_with_index_selects(self, reconciler, state):
        outcome = reconciler.rawEvent_apply(
            {"listEvent": {"eventType": 3, "currentSelectItemIndex": 2}}
        )
        assert outcome.kind == CanonicalEvent.DOUBLE_CLICK
        assert state.selected_index == 2

    def test_unknown_text_event_changes_nothing(self, reconciler, state):
        state.selected_index = 1
        outcome = reconciler.rawEvent_apply({"textEvent": {"eventType": 9}})
        assert state.selected_index == 1
        assert outcome.resolved_index == UNRESOLVED_INDEX
        assert state.last_event == "glasses: unknown"

    def test_events_on_empty_list_keep_index_zero(self):
        state = ApplicationState()
        reconciler = StateReconciler(state)
        for raw in ({"eventType": 1}, {"eventType": 2}, {"eventType": 0}, {"listEvent": {}}):
            reconciler.rawEvent_apply(raw)
            assert state.selected_index == 0

    def test_selection_stays_in_range(self, reconciler, state):
        payloads = [
            {"eventType": 2},
            {"eventType": 2},
            {"eventType": 2},
            {"listEvent": {"eventType": 1, "currentSelectItemIndex": 99}},
            {"jsonData": {"currentSelectItemIndex": "-3"}},
            {"eventType": 1},
            {"eventType": 1},
        ]
        for raw in payloads:
            reconciler.rawEvent_apply(raw)
            assert 0 <= state.selected_index < len(state.options)


class TestLabelSource:
    """Name matching uses the rendered labels"""

    def test_truncated_labels(self):
        state = ApplicationState(options=OptionList(["http://very-long-host/a", "http://x"]))
        reconciler = StateReconciler(state, lambda s: [label[:12] for label in s.options])
        reconciler.rawEvent_apply({"listEvent": {"eventType": 0, "currentSelectItemName": "http://x"}})
        assert state.selected_index == 1


class TestLocalActions:
    """Web panel path"""

    def test_local_action_labels_and_clamps(self, reconciler, state):
        def mutate(s: ApplicationState) -> None:
            s.options.remove("Orange")
            s.selected_index = 5

        reconciler.localAction_apply("remove Orange", mutate)
        assert state.selected_index == 1
        assert state.last_event == "web: remove Orange"

    def test_local_action_without_mutator(self, reconciler, state):
        reconciler.localAction_apply("manual sync")
        assert state.last_event == "web: manual sync"

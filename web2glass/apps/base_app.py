"""
Base template app: counter, active flag and theme list.

Glasses: Up/Down moves through themes, Click toggles the active flag,
Double-click resets counter and flag. Panel: counter -1/+1, reset and a
manual sync button. Both surfaces render from one `TemplateState`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from web2glass.apps.base import AppContext, AppModule, DualSurfaceApp
from web2glass.common.config import DEFAULT_THEMES
from web2glass.common.settings import settings
from web2glass.common.types import ApplicationState, CanonicalEvent, EventOutcome, OptionList
from web2glass.surface.page import ListElement, PageLayout, TextElement

logger = logging.getLogger(__name__)

__all__ = [
    "TemplateState",
    "BaseTemplateApp",
    "previewBackground_get",
    "barWidth_get",
    "baseApp_create",
    "BASE_APP_MODULE",
]

_THEME_COLOURS: dict[str, tuple[str, str]] = {
    "Blue": ("18, 64, 130", "40, 120, 202"),
    "Green": ("12, 90, 46", "27, 140, 90"),
    "Orange": ("125, 56, 12", "185, 92, 34"),
}


@dataclass
class TemplateState(ApplicationState):
    """Base template state: shared selection fields plus counter and flag"""

    counter: int = 0
    active: bool = False


def previewBackground_get(theme: str, active: bool) -> str:
    """
    Panel preview gradient for a theme.

    Args:
        theme: Theme label; unknown labels use the Blue palette.
        active: Active flag; controls opacity.

    Returns:
        CSS gradient string.
    """
    alpha: str = "0.95" if active else "0.45"
    start, end = _THEME_COLOURS.get(theme, _THEME_COLOURS["Blue"])
    return f"linear-gradient(135deg, rgba({start}, {alpha}), rgba({end}, {alpha}))"


def barWidth_get(counter: int) -> str:
    """Progress bar width, counter clamped to 0-100 percent."""
    return f"{max(0, min(100, counter))}%"


class BaseTemplateApp(DualSurfaceApp[TemplateState]):
    """Template app mirrored on the panel and the glasses."""

    log_prefix = "Base template"
    web_actions = ("counter_decrement", "counter_increment", "state_reset", "glasses_sync", "theme_select")

    def __init__(self, context: AppContext, themes: Optional[list[str]] = None) -> None:
        """
        Create app.

        Args:
            context: Host collaborators.
            themes: Theme labels; defaults to Blue, Green, Orange.
        """
        state = TemplateState(options=OptionList(themes or list(DEFAULT_THEMES)))
        super().__init__(context, state)
        self.renderer.local_render(self.state)

    # Rendering ---------------------------------------------------------

    def panel_build(self, state: TemplateState) -> Mapping[str, str]:
        theme: str = state.selectedLabel_get() or ""
        return {
            "Counter": str(state.counter),
            "State": "active" if state.active else "idle",
            "Theme": theme,
            "Last Event": state.last_event,
            "Bar": barWidth_get(state.counter),
            "Preview": previewBackground_get(theme, state.active),
        }

    def layout_build(self, state: TemplateState) -> PageLayout:
        theme: str = state.selectedLabel_get() or ""
        return PageLayout(
            texts=(
                TextElement(
                    element_id=1,
                    name="base-state",
                    content=f"Base Template | State: {'active' if state.active else 'idle'} | Theme: {theme}",
                    x=8,
                    y=10,
                    width=560,
                    height=52,
                ),
                TextElement(
                    element_id=2,
                    name="base-counter",
                    content=f"Counter: {state.counter} | Last: {state.last_event}",
                    x=8,
                    y=64,
                    width=560,
                    height=62,
                ),
            ),
            lists=(
                ListElement(
                    element_id=3,
                    name="base-theme-list",
                    items=tuple(state.options),
                    selected_index=state.selected_index,
                    x=4,
                    y=132,
                    width=572,
                    height=156,
                    item_width=566,
                ),
            ),
        )

    # Glasses events ----------------------------------------------------

    async def outcome_handle(self, outcome: EventOutcome) -> None:
        """Click toggles the flag; double-click resets counter and flag."""
        if outcome.kind == CanonicalEvent.CLICK:
            self.state.active = not self.state.active
        elif outcome.kind == CanonicalEvent.DOUBLE_CLICK:
            self.state.counter = 0
            self.state.active = False

        self.event_log.append(
            f"{self.log_prefix}: {self.state.last_event}, "
            f"theme={self.state.selectedLabel_get()}, counter={self.state.counter}"
        )
        self.renderer.render(self.state)

    # Panel actions -----------------------------------------------------

    def counter_decrement(self) -> None:
        """Counter -1, floored at 0."""
        def mutate(state: TemplateState) -> None:
            state.counter = max(0, state.counter - 1)

        self.localAction_run("counter -1", mutate)

    def counter_increment(self) -> None:
        """Counter +1."""
        def mutate(state: TemplateState) -> None:
            state.counter += 1

        self.localAction_run("counter +1", mutate)

    def state_reset(self) -> None:
        """Zero the counter and clear the flag."""
        def mutate(state: TemplateState) -> None:
            state.counter = 0
            state.active = False

        self.localAction_run("reset", mutate)

    def glasses_sync(self) -> None:
        """Push every element to the glasses again."""
        self.localAction_run("manual sync", force=True)

    def theme_select(self, index: int) -> None:
        """Select a theme from the panel."""
        def mutate(state: TemplateState) -> None:
            state.selection_set(index)

        self.localAction_run(f"theme -> {index}", mutate)

    async def mainAction_run(self) -> None:
        """Main action: counter +1 with an awaited glasses sync."""
        if not self.connected:
            self.status_set(f"{self.log_prefix}: not connected")
            self.event_log.append(f"{self.log_prefix}: action blocked (not connected)")
            return

        def mutate(state: TemplateState) -> None:
            state.counter += 1

        self.reconciler.localAction_apply("main action button", mutate)
        self.renderer.local_render(self.state)
        await self.renderer.remote_render(self.state)
        self.status_set(f"{self.log_prefix}: counter incremented and synced.")
        self.event_log.append(f"{self.log_prefix}: main action increment")


def baseApp_create(context: AppContext) -> BaseTemplateApp:
    """Factory used by the app registry; themes come from config when loaded."""
    themes: Optional[list[str]] = None
    if settings.initialized_check():
        themes = settings.config.base_app.themes
    return BaseTemplateApp(context, themes)


BASE_APP_MODULE = AppModule(
    id="base_app",
    name="Base Template",
    page_title="Even Hub Base App Template",
    connect_label="Connect Base Template",
    action_label="Increment Counter",
    initial_status="Base template ready",
    actions_create=baseApp_create,
)

"""
REST API app: pick a URL on either surface and GET it.

Glasses: Up/Down moves through the URL list and runs the newly selected
URL, Click runs the selected URL. Panel: select, add and remove URLs and run
the selected one. Response status and a short preview are shown on the
glasses status line; the full body goes to the panel.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import partial
from typing import Awaitable, Callable, Mapping, Optional, Sequence

from web2glass.apps.base import AppContext, AppModule, DualSurfaceApp
from web2glass.apps.fetch import FetchResult, text_fetch
from web2glass.common.config import DEFAULT_URLS
from web2glass.common.settings import settings
from web2glass.common.types import (
    ApplicationState,
    CanonicalEvent,
    EventOutcome,
    OptionList,
    RawEvent,
    SurfaceMode,
    index_clamp,
)
from web2glass.surface.page import ListElement, PageLayout, TextElement

logger = logging.getLogger(__name__)

__all__ = [
    "RestApiState",
    "RestApiApp",
    "listLabel_get",
    "restApiApp_create",
    "RESTAPI_MODULE",
]

DEFAULT_STATUS_MESSAGE: str = "Select URL and click"
DEFAULT_RESPONSE_TEXT: str = "Response output will appear here."

Fetcher = Callable[[str], Awaitable[FetchResult]]

_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass
class RestApiState(ApplicationState):
    """REST API state: URL list selection plus request output"""

    status_message: str = DEFAULT_STATUS_MESSAGE
    response_text: str = DEFAULT_RESPONSE_TEXT
    is_fetching: bool = False


def listLabel_get(url: str) -> str:
    """Glasses list label for a URL, truncated with '...'"""
    limit: int = settings.LIST_LABEL_MAX_LENGTH
    if len(url) <= limit:
        return url
    return f"{url[: limit - 3]}..."


class RestApiApp(DualSurfaceApp[RestApiState]):
    """URL runner mirrored on the panel and the glasses."""

    log_prefix = "REST API"
    web_actions = ("url_select", "url_add", "url_remove")

    def __init__(
        self,
        context: AppContext,
        urls: Optional[Sequence[str]] = None,
        fetcher: Optional[Fetcher] = None,
    ) -> None:
        """
        Create app.

        Args:
            context: Host collaborators.
            urls: Initial URL list; defaults to the built-in URLs.
            fetcher: GET coroutine; defaults to a direct `aiohttp` fetch.
        """
        state = RestApiState(options=OptionList(list(urls if urls is not None else DEFAULT_URLS)))
        super().__init__(context, state)
        self._fetcher: Fetcher = fetcher if fetcher is not None else text_fetch
        self.renderer.local_render(self.state)

    # Rendering ---------------------------------------------------------

    def listLabels_get(self, state: RestApiState) -> Sequence[str]:
        return [listLabel_get(url) for url in state.options]

    def panel_build(self, state: RestApiState) -> Mapping[str, str]:
        return {
            "URLs": str(len(state.options)),
            "Selected": state.selectedLabel_get() or "",
            "Glasses": state.status_message,
            "Last Event": state.last_event,
            "Response": state.response_text,
        }

    def layout_build(self, state: RestApiState) -> PageLayout:
        labels: list[str] = list(self.listLabels_get(state)) or [settings.EMPTY_LIST_LABEL]
        return PageLayout(
            texts=(
                TextElement(
                    element_id=1,
                    name="restapi-title",
                    content="REST API (Up/Down + Click)",
                    x=8,
                    y=0,
                    width=560,
                    height=32,
                ),
                TextElement(
                    element_id=2,
                    name="restapi-status",
                    content=state.status_message,
                    x=8,
                    y=34,
                    width=560,
                    height=64,
                ),
            ),
            lists=(
                ListElement(
                    element_id=3,
                    name="restapi-url-list",
                    items=tuple(labels),
                    selected_index=index_clamp(state.selected_index, len(labels)),
                    x=4,
                    y=102,
                    width=572,
                    height=186,
                    item_width=566,
                ),
            ),
        )

    def connectedStatus_get(self, mode: SurfaceMode) -> str:
        if mode == SurfaceMode.BRIDGE:
            return "REST API ready. Use glasses Up/Down and Click to run URL."
        return "REST API controls ready. Bridge not found, browser mode active."

    async def connected_start(self, mode: SurfaceMode) -> None:
        self.state.status_message = DEFAULT_STATUS_MESSAGE
        self.state.selection_clamp()
        await self.renderer.remote_render(self.state)

    # Glasses events ----------------------------------------------------

    def bridgeEvent_accept(self, raw: RawEvent) -> bool:
        if len(self.state.options) == 0:
            logger.debug("Ignoring bridge event: URL list is empty")
            return False
        return True

    async def outcome_handle(self, outcome: EventOutcome) -> None:
        """Scrolls run a newly selected URL; clicks run the selected URL."""
        url: str = self.state.selectedLabel_get() or ""
        self.renderer.render(self.state)

        if outcome.kind in (CanonicalEvent.SCROLL_UP, CanonicalEvent.SCROLL_DOWN):
            direction: str = "up" if outcome.kind == CanonicalEvent.SCROLL_UP else "down"
            self.event_log.append(f"REST API glass: {direction} -> {url}")
            if outcome.selectionChanged_check():
                await self.request_run(self.state.selected_index)
            return

        if outcome.kind == CanonicalEvent.CLICK or outcome.implicit_list:
            self.event_log.append(f"REST API glass: click -> run {url}")
            await self.request_run(self.state.selected_index)

    # Requests ----------------------------------------------------------

    async def glasses_show(self, message: str) -> None:
        """Show a message on the glasses status line."""
        self.state.status_message = message
        self.renderer.local_render(self.state)
        await self.renderer.remote_render(self.state)

    async def request_run(self, index: int) -> None:
        """
        GET the URL at index and show the result on both surfaces.

        Args:
            index: URL index (clamped).
        """
        if len(self.state.options) == 0:
            self.status_set("No URL selected")
            self.event_log.append("REST API: request blocked (no URL selected)")
            return

        self.state.selection_set(index)
        self.renderer.local_render(self.state)

        if self.state.is_fetching:
            self.status_set("Request already in progress")
            self.event_log.append("REST API: request ignored (already in progress)")
            return

        url: str = self.state.options[self.state.selected_index]
        self.status_set(f"Fetching {url} ...")
        self.event_log.append(f"REST API: GET {url}")

        self.state.is_fetching = True
        try:
            await self.glasses_show("Loading...")
            glasses_message: str = await self.response_fetch(url)
        finally:
            self.state.is_fetching = False

        await self.glasses_show(glasses_message)

    async def response_fetch(self, url: str) -> str:
        """
        Fetch one URL and record the response on the panel.

        Args:
            url: Target URL.

        Returns:
            Glasses status line for the result.
        """
        try:
            result: FetchResult = await self._fetcher(url)
        except Exception as exc:
            message: str = str(exc) or type(exc).__name__
            logger.warning("GET %s failed: %s", url, message)
            self.state.response_text = f"Request failed:\n{message}"
            self.status_set("GET failed")
            self.event_log.append(f"REST API: request failed ({message})")
            return f"GET failed: {message[: settings.GLASSES_ERROR_LENGTH]}"

        body: str = result.body
        preview: str = body
        if len(body) > settings.RESPONSE_PREVIEW_LENGTH:
            preview = f"{body[: settings.RESPONSE_PREVIEW_LENGTH]}..."
        self.state.response_text = body
        self.status_set(f"GET complete: {result.status_line}")
        self.event_log.append(f"REST API: {result.status_line}")
        self.event_log.append(f"REST API response preview: {preview.replace(chr(10), ' ')}")
        compact: str = _WHITESPACE_RUN.sub(" ", preview)[: settings.GLASSES_PREVIEW_LENGTH]
        return f"GET {result.status_line}\n{compact}"

    async def mainAction_run(self) -> None:
        """Main action: run the selected URL."""
        if not self.connected:
            self.status_set("Run setup first")
            self.event_log.append("REST API: request blocked (setup not run)")
            return
        await self.request_run(self.state.selected_index)

    # Panel actions -----------------------------------------------------

    def url_select(self, index: int) -> None:
        """Select a URL from the panel."""
        def mutate(state: RestApiState) -> None:
            state.selection_set(index)

        self.localAction_run(f"select {index}", mutate)

    def url_add(self, url: str) -> bool:
        """
        Add a URL and select it.

        Args:
            url: URL text from the panel input.

        Returns:
            True unless the input was blank.
        """
        trimmed: str = url.strip()
        if not trimmed:
            self.status_set("Enter a URL before adding")
            return False

        def mutate(state: RestApiState) -> None:
            state.options.add(trimmed)
            state.selection_set(state.options.index_of(trimmed))

        self.localAction_run(f"add {trimmed}", mutate)
        self.status_set(f"Added URL: {trimmed}")
        self.event_log.append(f"REST API: added URL {trimmed}")
        return True

    def url_remove(self) -> Optional[str]:
        """
        Remove the selected URL; the previous row becomes selected.

        Returns:
            Removed URL, or None when the list was empty.
        """
        current: Optional[str] = self.state.selectedLabel_get()
        if current is None:
            self.status_set("No URL selected")
            return None

        def mutate(state: RestApiState) -> None:
            position: int = state.options.remove(current)
            state.selection_set(max(0, position - 1))

        self.localAction_run(f"remove {current}", mutate)
        self.status_set(f"Removed URL: {current}")
        self.event_log.append(f"REST API: removed URL {current}")
        return current


def restApiApp_create(context: AppContext) -> RestApiApp:
    """Factory used by the app registry; URLs and proxy come from config when loaded."""
    if not settings.initialized_check():
        return RestApiApp(context)
    restapi_config = settings.config.restapi
    fetcher: Fetcher = partial(
        text_fetch,
        proxy_url=restapi_config.proxy_url,
        timeout_seconds=restapi_config.request_timeout_seconds,
    )
    return RestApiApp(context, urls=restapi_config.urls, fetcher=fetcher)


RESTAPI_MODULE = AppModule(
    id="restapi",
    name="REST API",
    page_title="Even Hub REST API",
    connect_label="Connect REST API",
    action_label="Run Selected URL",
    initial_status="REST API ready",
    actions_create=restApiApp_create,
)

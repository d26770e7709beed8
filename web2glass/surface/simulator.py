"""
In-process glasses bridge simulator.

`SimulatedBridge` implements the `BridgeHandle` protocol against an
in-memory page. It records every request it receives, rejects in-place
updates that do not fit the displayed page (unknown element, element kind
change, or changed list rows) and forwards injected raw payloads to its
listeners the way the hardware bridge would.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from web2glass.common.types import RawEvent
from web2glass.surface.backend import BridgeListener
from web2glass.surface.page import ListElement, PageElement, PageLayout

logger = logging.getLogger(__name__)

__all__ = ["BridgeRequest", "SimulatedBridge"]


@dataclass(frozen=True)
class BridgeRequest:
    """One request received by the simulator"""
    kind: str  # "create", "rebuild" or "update"
    body: Dict[str, Any]


class SimulatedBridge:
    """In-memory glasses bridge."""

    def __init__(self, reject_updates: bool = False, reject_rebuilds: bool = False) -> None:
        """
        Initialize simulator with an empty display.

        Args:
            reject_updates: Refuse every in-place update.
            reject_rebuilds: Refuse every page rebuild.
        """
        self.reject_updates: bool = reject_updates
        self.reject_rebuilds: bool = reject_rebuilds
        self.page: Optional[PageLayout] = None
        self.requests: list[BridgeRequest] = []
        self._listeners: list[BridgeListener] = []

    async def page_create(self, layout: PageLayout) -> bool:
        """Construct startup page."""
        self.requests.append(BridgeRequest(kind="create", body=layout.container_build()))
        self.page = layout
        return True

    async def page_rebuild(self, layout: PageLayout) -> bool:
        """Replace displayed page unless rebuilds are rejected."""
        self.requests.append(BridgeRequest(kind="rebuild", body=layout.container_build()))
        if self.reject_rebuilds:
            return False
        self.page = layout
        return True

    async def element_update(self, element: PageElement) -> bool:
        """Patch one element if it fits the displayed page."""
        self.requests.append(BridgeRequest(kind="update", body=element.container_build()))
        if self.reject_updates or self.page is None:
            return False

        current: Optional[PageElement] = self.page.element_get(element.name)
        if current is None or type(current) is not type(element):
            return False
        if isinstance(current, ListElement) and isinstance(element, ListElement):
            if current.items != element.items:
                return False

        self.page = self.pageElement_replace(self.page, element)
        return True

    @staticmethod
    def pageElement_replace(page: PageLayout, element: PageElement) -> PageLayout:
        """Return page with one element swapped by name."""
        texts = tuple(element if text.name == element.name else text for text in page.texts)
        lists = tuple(element if item.name == element.name else item for item in page.lists)
        return replace(page, texts=texts, lists=lists)

    def listener_add(self, listener: BridgeListener) -> None:
        """Subscribe to injected events."""
        self._listeners.append(listener)

    def listenerCount_get(self) -> int:
        """Number of subscribed listeners."""
        return len(self._listeners)

    async def event_inject(self, raw: RawEvent) -> None:
        """
        Deliver a raw payload to every listener, in subscription order.

        Args:
            raw: Raw bridge payload.
        """
        logger.debug("Simulated bridge event: %s", raw)
        for listener in list(self._listeners):
            result = listener(raw)
            if inspect.isawaitable(result):
                await result

    def requestKinds_get(self) -> list[str]:
        """Kinds of all requests received so far."""
        return [request.kind for request in self.requests]

    def displayedText_get(self, name: str) -> Optional[str]:
        """Content of a displayed text element."""
        if self.page is None:
            return None
        element = self.page.element_get(name)
        if element is None or isinstance(element, ListElement):
            return None
        return element.content

    def displayedList_get(self) -> Optional[ListElement]:
        """First displayed list element."""
        if self.page is None or not self.page.lists:
            return None
        return self.page.lists[0]


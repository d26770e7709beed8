"""Surface protocols for the local panel and the glasses bridge."""

from __future__ import annotations

from typing import Awaitable, Callable, Mapping, Protocol, Union

from web2glass.common.types import RawEvent
from web2glass.surface.page import PageElement, PageLayout

BridgeListener = Callable[[RawEvent], Union[Awaitable[None], None]]


class LocalDisplay(Protocol):
    """Synchronous local panel surface."""

    def fields_write(self, fields: Mapping[str, str]) -> None:
        """
        Replace all visible panel fields.

        Args:
            fields: Field label to display value.
        """


class BridgeHandle(Protocol):
    """Opaque glasses bridge capability."""

    async def page_create(self, layout: PageLayout) -> bool:
        """
        Construct the startup page from scratch.

        Args:
            layout: Complete page layout.

        Returns:
            True if the bridge accepted the page.
        """

    async def page_rebuild(self, layout: PageLayout) -> bool:
        """
        Replace the displayed page.

        Args:
            layout: Complete page layout.

        Returns:
            True if the bridge accepted the page.
        """

    async def element_update(self, element: PageElement) -> bool:
        """
        Patch one displayed element in place.

        Args:
            element: Element with new content.

        Returns:
            True if updated; False on structural mismatch.
        """

    def listener_add(self, listener: BridgeListener) -> None:
        """
        Subscribe to raw bridge events.

        Args:
            listener: Callback receiving each raw payload.
        """

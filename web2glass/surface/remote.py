"""
Remote (glasses) surface variants.

A remote surface is either a `BridgeSurface` wrapping a live bridge handle
or a `MockSurface` whose operations are no-ops. Callers dispatch through the
shared `RemoteSurface` protocol and only the bridge detector decides which
variant is active.

The bridge variant owns the render-cycle flag: the first render after a
connection performs a full page construction; later renders patch changed
elements in place and fall back to a full rebuild when the bridge rejects
any patch.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Protocol

from web2glass.common.types import SurfaceMode
from web2glass.surface.backend import BridgeHandle
from web2glass.surface.page import PageElement, PageLayout

logger = logging.getLogger(__name__)

__all__ = [
    "RenderResult",
    "RemoteRenderError",
    "RemoteSurface",
    "BridgeSurface",
    "MockSurface",
]


class RenderResult(Enum):
    """Which remote request a render issued"""
    CREATED = "created"
    UPDATED = "updated"
    REBUILT = "rebuilt"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"


class RemoteRenderError(RuntimeError):
    """The bridge rejected a full page construction or rebuild"""


class RemoteSurface(Protocol):
    """Common interface of bridge and mock remote surfaces."""

    mode: SurfaceMode

    async def page_render(self, layout: PageLayout, force: bool = False) -> RenderResult:
        """
        Show layout on the remote display.

        Args:
            layout: Complete page layout derived from current state.
            force: Patch every element, not only changed ones.

        Returns:
            Request kind that was issued.
        """


class MockSurface:
    """Remote surface used when no bridge is available."""

    mode: SurfaceMode = SurfaceMode.MOCK

    async def page_render(self, layout: PageLayout, force: bool = False) -> RenderResult:
        """No-op render; the bridge is unavailable."""
        return RenderResult.SKIPPED


class BridgeSurface:
    """Remote surface bound to one bridge connection."""

    mode: SurfaceMode = SurfaceMode.BRIDGE

    def __init__(self, handle: BridgeHandle) -> None:
        """
        Bind surface to a freshly acquired bridge handle.

        Args:
            handle: Live bridge handle.
        """
        self.handle: BridgeHandle = handle
        self.startup_rendered: bool = False
        self._last_layout: Optional[PageLayout] = None

    async def page_render(self, layout: PageLayout, force: bool = False) -> RenderResult:
        """
        Render layout with the startup / update / rebuild protocol.

        Args:
            layout: Complete page layout derived from current state.
            force: Patch every element, not only changed ones.

        Returns:
            Request kind that was issued.

        Raises:
            RemoteRenderError: If a full construction or rebuild is rejected.
        """
        if not self.startup_rendered:
            if not await self.handle.page_create(layout):
                raise RemoteRenderError("Bridge rejected startup page")
            self.startup_rendered = True
            self._last_layout = layout
            logger.debug("Startup page created")
            return RenderResult.CREATED

        targets: list[PageElement] = (
            list(layout.elements()) if force else layout.changedElements_get(self._last_layout)
        )
        if not targets:
            return RenderResult.UNCHANGED

        if await self.elements_update(targets):
            self._last_layout = layout
            return RenderResult.UPDATED

        logger.debug("Incremental update rejected, rebuilding page")
        await self.page_rebuild(layout)
        return RenderResult.REBUILT

    async def elements_update(self, targets: list[PageElement]) -> bool:
        """
        Patch elements in place.

        Args:
            targets: Elements to patch.

        Returns:
            True only if every element was patched.
        """
        all_updated: bool = True
        for element in targets:
            try:
                updated: bool = await self.handle.element_update(element)
            except Exception as exc:
                logger.warning("Update of %s failed: %s", element.name, exc)
                updated = False
            if not updated:
                all_updated = False
        return all_updated

    async def page_rebuild(self, layout: PageLayout) -> None:
        """
        Replace the whole page.

        Raises:
            RemoteRenderError: If the bridge rejects the rebuild.
        """
        if not await self.handle.page_rebuild(layout):
            raise RemoteRenderError("Bridge rejected page rebuild")
        self._last_layout = layout

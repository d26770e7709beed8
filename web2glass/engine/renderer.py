"""
Dual-surface rendering of one application state.

The local panel is rendered synchronously on every call. The remote surface
is rendered asynchronously: `render` schedules it fire-and-forget through a
single "latest pending" slot, so at most one scheduled render is in flight
and the scheduled render that runs last always reads the current state.
Only scheduled renders are coalesced. `remote_render` is the awaited form
used where the caller needs the outcome; it bypasses the pending slot.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Generic, Mapping, Optional, TypeVar

from web2glass.common.types import ApplicationState, SurfaceMode
from web2glass.surface.backend import LocalDisplay
from web2glass.surface.page import PageLayout
from web2glass.surface.remote import MockSurface, RemoteSurface, RenderResult

logger = logging.getLogger(__name__)

__all__ = ["DualSurfaceRenderer"]

StateT = TypeVar("StateT", bound=ApplicationState)


class DualSurfaceRenderer(Generic[StateT]):
    """Keeps the local panel and the glasses display in step with one state."""

    def __init__(
        self,
        local: LocalDisplay,
        panel_build: Callable[[StateT], Mapping[str, str]],
        layout_build: Callable[[StateT], PageLayout],
    ) -> None:
        """
        Wire renderer to its surfaces.

        Args:
            local:
                Local panel surface.
            panel_build:
                Derives every visible panel field from state.
            layout_build:
                Derives the complete glasses page from state.
        """
        self.local: LocalDisplay = local
        self.remote: RemoteSurface = MockSurface()
        self._panel_build = panel_build
        self._layout_build = layout_build
        self._pending_state: Optional[StateT] = None
        self._pending_force: bool = False
        self._render_task: Optional[asyncio.Task[None]] = None
        self.last_result: Optional[RenderResult] = None

    def remote_set(self, remote: RemoteSurface) -> None:
        """
        Switch remote surface after a (re)connect.

        Args:
            remote: Surface chosen by the bridge detector.
        """
        self.remote = remote
        logger.debug("Remote surface set to %s", remote.mode.value)

    def remoteMode_get(self) -> SurfaceMode:
        """Mode of the active remote surface."""
        return self.remote.mode

    def local_render(self, state: StateT) -> Mapping[str, str]:
        """
        Recompute and write every panel field.

        Args:
            state: Application state.

        Returns:
            Written fields.
        """
        fields: Mapping[str, str] = self._panel_build(state)
        self.local.fields_write(fields)
        return fields

    def render(self, state: StateT, force: bool = False) -> None:
        """
        Render local panel now and schedule the remote render.

        Args:
            state: Application state.
            force: Patch every remote element, not only changed ones.
        """
        self.local_render(state)
        self.remote_schedule(state, force)

    def remote_schedule(self, state: StateT, force: bool = False) -> None:
        """
        Queue a remote render, coalescing with any render already queued.

        Args:
            state: Application state.
            force: Patch every remote element.
        """
        self._pending_state = state
        self._pending_force = self._pending_force or force
        if self._render_task is not None and not self._render_task.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; remote render not scheduled")
            self._pending_state = None
            self._pending_force = False
            return
        self._render_task = loop.create_task(self.pendingRenders_run())

    async def pendingRenders_run(self) -> None:
        """Drain the pending slot; failures are logged, not raised."""
        while self._pending_state is not None:
            state: StateT = self._pending_state
            force: bool = self._pending_force
            self._pending_state = None
            self._pending_force = False
            try:
                await self.remote_render(state, force)
            except Exception as exc:
                logger.error("Remote render failed: %s", exc)

    async def remote_render(self, state: StateT, force: bool = False) -> RenderResult:
        """
        Render state on the remote surface and wait for the outcome.

        Args:
            state: Application state.
            force: Patch every remote element.

        Returns:
            Request kind that was issued.

        Raises:
            RemoteRenderError: If the full construction or rebuild is rejected.
        """
        layout: PageLayout = self._layout_build(state)
        result: RenderResult = await self.remote.page_render(layout, force)
        self.last_result = result
        logger.debug("Remote render: %s", result.value)
        return result

    async def drain(self) -> None:
        """Wait until no scheduled remote render is pending."""
        while self._render_task is not None and not self._render_task.done():
            await asyncio.shield(self._render_task)

"""
Bridge availability detection with a bounded acquisition window.

`connect` races the bridge acquisition against a timer. Winning yields
BRIDGE mode and a fresh `BridgeSurface`; losing (timeout or failure) yields
MOCK mode. Bridge absence is an expected outcome and is reported through the
returned mode, never raised.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import weakref
from typing import Any, Optional

from web2glass.common.settings import settings
from web2glass.common.types import RawEvent, SurfaceMode
from web2glass.surface.backend import BridgeHandle, BridgeListener
from web2glass.surface.factory import BridgeAcquire
from web2glass.surface.remote import BridgeSurface, MockSurface, RemoteSurface

logger = logging.getLogger(__name__)

__all__ = ["BridgeDetector"]


def _abandonedResult_discard(task: "asyncio.Future[Any]") -> None:
    if task.cancelled():
        return
    exc: Optional[BaseException] = task.exception()
    if exc is not None:
        logger.debug("Abandoned bridge acquisition failed: %s", exc)
    else:
        logger.debug("Abandoned bridge acquisition resolved late; ignored")


class BridgeDetector:
    """Owns the bridge handle and the remote surface variant."""

    def __init__(self, acquire: BridgeAcquire, listener: BridgeListener) -> None:
        """
        Initialize detector in MOCK mode.

        Args:
            acquire:
                Coroutine function returning a bridge handle.
            listener:
                Consumer of raw bridge events (registered once per handle).
        """
        self._acquire: BridgeAcquire = acquire
        self._listener: BridgeListener = listener
        self._generation: int = 0
        self._registered_handles: "weakref.WeakSet[BridgeHandle]" = weakref.WeakSet()
        self.handle: Optional[BridgeHandle] = None
        self.surface: RemoteSurface = MockSurface()
        self.mode: SurfaceMode = SurfaceMode.MOCK

    async def connect(self, timeout_ms: Optional[int] = None) -> SurfaceMode:
        """
        Acquire the bridge within a time budget.

        Args:
            timeout_ms:
                Acquisition budget; defaults to 4000 ms.

        Returns:
            Resulting surface mode.
        """
        self._generation += 1
        generation: int = self._generation
        budget_ms: int = timeout_ms if timeout_ms is not None else settings.DEFAULT_CONNECT_TIMEOUT_MS

        handle: Optional[BridgeHandle] = await self.handle_acquire(budget_ms)
        if generation != self._generation:
            logger.debug("Connect attempt %s superseded; result ignored", generation)
            return self.mode

        if handle is None:
            self.handle = None
            self.surface = MockSurface()
            self.mode = SurfaceMode.MOCK
            return self.mode

        self.handle = handle
        self.listener_register(handle)
        self.surface = BridgeSurface(handle)
        self.mode = SurfaceMode.BRIDGE
        return self.mode

    async def handle_acquire(self, budget_ms: int) -> Optional[BridgeHandle]:
        """
        Race acquisition against the timer; the loser is abandoned.

        Args:
            budget_ms:
                Acquisition budget in milliseconds.

        Returns:
            Bridge handle, or None on timeout or failure.
        """
        task: asyncio.Future[BridgeHandle] = asyncio.ensure_future(self._acquire())
        done, _ = await asyncio.wait({task}, timeout=budget_ms / 1000.0)

        if task not in done:
            task.cancel()
            task.add_done_callback(_abandonedResult_discard)
            logger.info("Bridge not available after %sms", budget_ms)
            return None

        try:
            return task.result()
        except Exception as exc:
            logger.warning("Bridge acquisition failed: %s", exc)
            return None

    def listener_register(self, handle: BridgeHandle) -> bool:
        """
        Subscribe the event listener to a handle exactly once.

        Args:
            handle:
                Bridge handle.

        Returns:
            True if a new subscription was made.
        """
        if handle in self._registered_handles:
            return False

        async def dispatch(raw: RawEvent) -> None:
            if handle is not self.handle:
                logger.debug("Dropping event from inactive bridge handle")
                return
            result = self._listener(raw)
            if inspect.isawaitable(result):
                await result

        handle.listener_add(dispatch)
        self._registered_handles.add(handle)
        logger.debug("Bridge event listener registered")
        return True

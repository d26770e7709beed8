"""Bridge acquisition factory functions."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from web2glass.surface.backend import BridgeHandle
from web2glass.surface.simulator import SimulatedBridge

BridgeAcquire = Callable[[], Awaitable[BridgeHandle]]


def simulatorAcquire_create(bridge: SimulatedBridge, delay_ms: int = 0) -> BridgeAcquire:
    """
    Create an acquisition coroutine that hands out a simulator.

    Args:
        bridge: Simulator to hand out (the same object on every call).
        delay_ms: Simulated bridge start-up latency.

    Returns:
        Acquisition coroutine function.
    """

    async def acquire() -> BridgeHandle:
        if delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000.0)
        return bridge

    return acquire


def unavailableAcquire_create() -> BridgeAcquire:
    """
    Create an acquisition coroutine that never resolves.

    This mirrors a page opened outside the glasses host app, where the
    bridge never appears.

    Returns:
        Acquisition coroutine function.
    """

    async def acquire() -> BridgeHandle:
        await asyncio.Event().wait()
        raise RuntimeError("unreachable")

    return acquire


def bridgeAcquire_create(
    backend_name: str,
    delay_ms: int = 0,
    reject_updates: bool = False,
) -> tuple[BridgeAcquire, Optional[SimulatedBridge]]:
    """
    Create bridge acquisition for a configured backend.

    Args:
        backend_name: Backend identifier ("simulator" or "none")
        delay_ms: Simulator start-up latency
        reject_updates: Simulator refuses in-place updates

    Returns:
        Tuple of (acquisition coroutine function, simulator or None)
    """
    backend = backend_name.lower()

    if backend == "simulator":
        bridge = SimulatedBridge(reject_updates=reject_updates)
        return simulatorAcquire_create(bridge, delay_ms=delay_ms), bridge

    if backend == "none":
        return unavailableAcquire_create(), None

    raise ValueError(f"Unsupported bridge backend '{backend_name}'. Supported: simulator, none.")

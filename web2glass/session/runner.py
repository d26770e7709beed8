"""
Scripted app sessions.

`SessionRunner` plays a list of `ScriptMessage`s against one app: connect
and main-action steps call the app's top-level handlers, web actions call
a named panel action, bridge events are injected through the simulator
bridge and waits give scheduled glasses renders time to land. Every step
ends by draining the app's pending remote render.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, TextIO

from web2glass.apps.base import DualSurfaceApp
from web2glass.session.script import ScriptMessage, ScriptMessageType
from web2glass.surface.simulator import SimulatedBridge

logger = logging.getLogger(__name__)

__all__ = ["SessionStepError", "SessionReport", "SessionRunner", "statusCallback_create"]


class SessionStepError(ValueError):
    """A script step could not be executed"""


@dataclass
class SessionReport:
    """Outcome of one scripted session"""
    steps_run: int = 0
    statuses: list[str] = field(default_factory=list)

    def status_record(self, message: str) -> None:
        """Record one host status line"""
        self.statuses.append(message)
        logger.info("Status: %s", message)


class SessionRunner:
    """Plays script messages against one app."""

    def __init__(
        self,
        app: DualSurfaceApp[Any],
        simulator: Optional[SimulatedBridge] = None,
        report: Optional[SessionReport] = None,
    ) -> None:
        """
        Bind runner to an app.

        Args:
            app: App under control.
            simulator: Simulator bridge used for bridge events, if any.
            report: Report shared with the app's status callback.
        """
        self.app: DualSurfaceApp[Any] = app
        self.simulator: Optional[SimulatedBridge] = simulator
        self.report: SessionReport = report if report is not None else SessionReport()

    async def script_run(self, messages: Iterable[ScriptMessage]) -> SessionReport:
        """
        Run every step in order.

        Args:
            messages: Parsed script.

        Returns:
            Session report.

        Raises:
            SessionStepError: On the first step that cannot be executed.
        """
        for message in messages:
            await self.step_run(message)
        await self.app.renderer.drain()
        return self.report

    async def step_run(self, message: ScriptMessage) -> None:
        """
        Execute one step and drain pending glasses renders.

        Args:
            message: Script step.
        """
        logger.debug("Running step %s %s", message.msg_type.value, message.payload)
        handler = {
            ScriptMessageType.CONNECT: self.connect_run,
            ScriptMessageType.ACTION: self.action_run,
            ScriptMessageType.WEB_ACTION: self.webAction_run,
            ScriptMessageType.BRIDGE_EVENT: self.bridgeEvent_run,
            ScriptMessageType.WAIT: self.wait_run,
        }[message.msg_type]
        await handler(message.payload)
        await self.app.renderer.drain()
        self.report.steps_run += 1

    async def connect_run(self, payload: dict[str, Any]) -> None:
        await self.app.connect()

    async def action_run(self, payload: dict[str, Any]) -> None:
        await self.app.action()

    async def webAction_run(self, payload: dict[str, Any]) -> None:
        name = payload.get("name")
        if not isinstance(name, str):
            raise SessionStepError("web_action needs a string 'name'")
        args = payload.get("args") or []
        if not isinstance(args, list):
            raise SessionStepError("web_action 'args' must be a list")
        try:
            result = self.app.webAction_run(name, args)
        except (ValueError, TypeError) as exc:
            raise SessionStepError(str(exc)) from exc
        if asyncio.iscoroutine(result):
            await result

    async def bridgeEvent_run(self, payload: dict[str, Any]) -> None:
        if self.simulator is None:
            raise SessionStepError("bridge_event steps need the simulator bridge backend")
        if self.simulator.listenerCount_get() == 0:
            logger.warning("Bridge event injected before connect; no listener will see it")
        await self.simulator.event_inject(payload)

    async def wait_run(self, payload: dict[str, Any]) -> None:
        ms = payload.get("ms", 0)
        if not isinstance(ms, (int, float)) or isinstance(ms, bool) or ms < 0:
            raise SessionStepError("wait 'ms' must be a non-negative number")
        await asyncio.sleep(ms / 1000.0)


def statusCallback_create(report: SessionReport, stream: Optional[TextIO] = None) -> Callable[[str], None]:
    """
    Build a host status callback that records and echoes status lines.

    Args:
        report: Report recording the lines.
        stream: Optional echo stream.

    Returns:
        Status callback.
    """

    def status_set(message: str) -> None:
        report.status_record(message)
        if stream is not None:
            stream.write(f"[status] {message}\n")
            stream.flush()

    return status_set

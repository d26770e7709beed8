"""
Shared wiring for dual-surface applications.

`DualSurfaceApp` owns one application state together with its reconciler,
renderer and bridge detector. Subclasses supply the panel fields, the
glasses page layout and any app-specific reaction to bridge events; the
base class supplies the connect handler, the bridge event entry point and
the local-action path that re-renders both surfaces.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, Optional, Protocol, Sequence, TypeVar

from web2glass.common.event_log import EventLog
from web2glass.common.types import ApplicationState, EventOutcome, RawEvent, SurfaceMode
from web2glass.engine.detector import BridgeDetector
from web2glass.engine.reconciler import StateReconciler
from web2glass.engine.renderer import DualSurfaceRenderer
from web2glass.surface.backend import LocalDisplay
from web2glass.surface.factory import BridgeAcquire
from web2glass.surface.page import PageLayout

logger = logging.getLogger(__name__)

__all__ = [
    "SetStatus",
    "AppActions",
    "AppContext",
    "AppModule",
    "DualSurfaceApp",
]

SetStatus = Callable[[str], None]

StateT = TypeVar("StateT", bound=ApplicationState)


class AppActions(Protocol):
    """Top-level actions exposed by every app."""

    async def connect(self) -> None:
        """Connect to the glasses bridge (or fall back to mock mode)."""
        ...

    async def action(self) -> None:
        """Run the app's main action."""
        ...


@dataclass
class AppContext:
    """
    Collaborators handed to an app at construction.

    Attributes:
        set_status:
            Host status-line callback.
        local:
            Local panel surface.
        acquire:
            Bridge acquisition coroutine function.
        event_log:
            Diagnostic event log.
        connect_timeout_ms:
            Bridge acquisition budget.
    """

    set_status: SetStatus
    local: LocalDisplay
    acquire: BridgeAcquire
    event_log: EventLog
    connect_timeout_ms: Optional[int] = None


@dataclass(frozen=True)
class AppModule:
    """Descriptor of one selectable app."""

    id: str
    name: str
    page_title: str
    connect_label: str
    action_label: str
    initial_status: str
    actions_create: Callable[[AppContext], "DualSurfaceApp"]


class DualSurfaceApp(Generic[StateT]):
    """Base class of apps mirrored on the panel and the glasses."""

    log_prefix: str = "App"
    web_actions: tuple[str, ...] = ()

    def __init__(self, context: AppContext, state: StateT) -> None:
        """
        Wire state, reconciler, renderer and detector.

        Args:
            context:
                Host collaborators.
            state:
                The app's only state instance.
        """
        self.context: AppContext = context
        self.state: StateT = state
        self.event_log: EventLog = context.event_log
        self.reconciler: StateReconciler[StateT] = StateReconciler(state, self.listLabels_get)
        self.renderer: DualSurfaceRenderer[StateT] = DualSurfaceRenderer(
            local=context.local,
            panel_build=self.panel_build,
            layout_build=self.layout_build,
        )
        self.detector: BridgeDetector = BridgeDetector(context.acquire, self.bridgeEvent_handle)
        self.connected: bool = False

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    def panel_build(self, state: StateT) -> Mapping[str, str]:
        """Derive every visible panel field from state."""
        raise NotImplementedError

    def layout_build(self, state: StateT) -> PageLayout:
        """Derive the complete glasses page from state."""
        raise NotImplementedError

    def listLabels_get(self, state: StateT) -> Sequence[str]:
        """List labels as rendered on the glasses."""
        return state.options.labels_get()

    async def outcome_handle(self, outcome: EventOutcome) -> None:
        """React to an applied bridge event (app-specific semantics)."""

    def connectedStatus_get(self, mode: SurfaceMode) -> str:
        """Status line after a successful connect."""
        if mode == SurfaceMode.BRIDGE:
            return f"{self.log_prefix}: connected. Web panel + glasses view are synchronized."
        return f"{self.log_prefix}: bridge unavailable. Running browser-only mock mode."

    # ------------------------------------------------------------------
    # Shared flow
    # ------------------------------------------------------------------

    def status_set(self, message: str) -> None:
        """Forward a status line to the host."""
        self.context.set_status(message)

    @property
    def mode(self) -> SurfaceMode:
        """Current remote surface mode."""
        return self.detector.mode

    async def connect(self) -> None:
        """
        Connect to the bridge; never raises.

        Unexpected failures are logged, recorded in the event log and turned
        into a "connection failed" status so the user can retry.
        """
        self.status_set(f"{self.log_prefix}: connecting to Even bridge...")
        self.event_log.append(f"{self.log_prefix}: connect requested")
        try:
            mode: SurfaceMode = await self.detector.connect(self.context.connect_timeout_ms)
            self.renderer.remote_set(self.detector.surface)
            self.connected = True
            await self.connected_start(mode)
            self.renderer.local_render(self.state)
            self.status_set(self.connectedStatus_get(mode))
            if mode == SurfaceMode.BRIDGE:
                self.event_log.append(f"{self.log_prefix}: bridge connected")
            else:
                self.event_log.append(f"{self.log_prefix}: mock mode")
        except Exception:
            logger.exception("%s connect failed", self.log_prefix)
            self.status_set(f"{self.log_prefix}: connection failed")
            self.event_log.append(f"{self.log_prefix}: connection failed")

    async def action(self) -> None:
        """
        Run the main action; never raises.

        Failures (a rejected glasses rebuild included) are logged, recorded
        in the event log and reported as an "action failed" status.
        """
        try:
            await self.mainAction_run()
        except Exception:
            logger.exception("%s action failed", self.log_prefix)
            self.status_set(f"{self.log_prefix}: action failed")
            self.event_log.append(f"{self.log_prefix}: action failed")

    async def mainAction_run(self) -> None:
        """App-specific main action."""
        raise NotImplementedError

    async def connected_start(self, mode: SurfaceMode) -> None:
        """
        First render after a connect; full construction in bridge mode.

        Args:
            mode:
                Mode reported by the detector.
        """
        await self.renderer.remote_render(self.state)

    async def bridgeEvent_handle(self, raw: RawEvent) -> None:
        """
        Entry point of raw bridge events.

        Args:
            raw:
                Raw bridge payload.
        """
        if not self.bridgeEvent_accept(raw):
            return
        outcome: EventOutcome = self.reconciler.rawEvent_apply(raw)
        try:
            await self.outcome_handle(outcome)
        except Exception:
            logger.exception("%s bridge event handling failed", self.log_prefix)
            self.event_log.append(f"{self.log_prefix}: bridge event failed")

    def bridgeEvent_accept(self, raw: RawEvent) -> bool:
        """Gate raw events before reconciliation."""
        return True

    def localAction_run(
        self,
        label: str,
        mutator: Optional[Callable[[StateT], None]] = None,
        force: bool = False,
    ) -> None:
        """
        Apply a panel action and re-render both surfaces.

        Args:
            label:
                Action label recorded as last event.
            mutator:
                Optional in-place state change.
            force:
                Patch every glasses element.
        """
        self.reconciler.localAction_apply(label, mutator)
        self.renderer.render(self.state, force=force)

    def webAction_run(self, name: str, args: Sequence[Any] = ()) -> Any:
        """
        Run a named panel action.

        Args:
            name:
                One of `web_actions`.
            args:
                Positional arguments of the action.

        Returns:
            Whatever the action returns.

        Raises:
            ValueError:
                If the app has no panel action of that name.
        """
        if name not in self.web_actions:
            raise ValueError(
                f"Unknown panel action '{name}' for {self.log_prefix}. "
                f"Supported: {', '.join(self.web_actions)}."
            )
        return getattr(self, name)(*args)

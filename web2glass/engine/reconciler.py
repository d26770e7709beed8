"""
State reconciliation for glasses- and web-originated changes.

This module owns every mutation of an `ApplicationState`. Bridge events are
decoded, normalized and resolved here, then applied through a fixed rule
table. Local panel actions take a shorter path that skips normalization.
Callers re-render both surfaces after either path returns.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Sequence, TypeVar

from web2glass.common.types import (
    UNRESOLVED_INDEX,
    ApplicationState,
    CanonicalEvent,
    EventOutcome,
    RawEvent,
    index_clamp,
)
from web2glass.protocol.decoder import listPayload_check, rawEventType_get
from web2glass.protocol.normalizer import eventLabel_get, eventType_normalize
from web2glass.protocol.selection import selectionIndex_resolve

logger = logging.getLogger(__name__)

__all__ = ["StateReconciler", "GLASSES_PREFIX", "WEB_PREFIX"]

GLASSES_PREFIX: str = "glasses"
WEB_PREFIX: str = "web"

StateT = TypeVar("StateT", bound=ApplicationState)


class StateReconciler(Generic[StateT]):
    """Single writer of one application state instance."""

    def __init__(
        self,
        state: StateT,
        labels_get: Callable[[StateT], Sequence[str]] | None = None,
    ) -> None:
        """
        Bind reconciler to its state.

        Args:
            state:
                The application's only state instance.
            labels_get:
                Returns the list labels as rendered on the glasses, used for
                name matching. Defaults to the raw option labels.
        """
        self.state: StateT = state
        self._labels_get: Callable[[StateT], Sequence[str]] = (
            labels_get if labels_get is not None else lambda s: s.options.labels_get()
        )

    def rawEvent_apply(self, raw: RawEvent) -> EventOutcome:
        """
        Decode, normalize, resolve and apply one bridge payload.

        Args:
            raw:
                Raw bridge payload.

        Returns:
            Outcome of the applied event.
        """
        kind: CanonicalEvent = eventType_normalize(rawEventType_get(raw))
        resolved_index: int = selectionIndex_resolve(raw, self._labels_get(self.state))
        has_list_payload: bool = listPayload_check(raw)
        logger.debug(
            "Bridge event %s resolved_index=%s list_payload=%s",
            kind.value,
            resolved_index,
            has_list_payload,
        )
        return self.canonicalEvent_apply(kind, resolved_index, has_list_payload)

    def canonicalEvent_apply(
        self,
        kind: CanonicalEvent,
        resolved_index: int,
        has_list_payload: bool,
    ) -> EventOutcome:
        """
        Apply a canonical event to the state; first matching rule wins.

        Args:
            kind:
                Canonical event kind.
            resolved_index:
                Resolver output, UNRESOLVED_INDEX when nothing resolved.
            has_list_payload:
                Whether the payload carried list-selection fields.

        Returns:
            Outcome of the applied event.
        """
        state: StateT = self.state
        length: int = len(state.options)
        previous_index: int = state.selected_index
        has_index: bool = 0 <= resolved_index < length
        implicit: bool = False

        if kind == CanonicalEvent.SCROLL_UP:
            state.selection_set(resolved_index if has_index else previous_index - 1)
        elif kind == CanonicalEvent.SCROLL_DOWN:
            state.selection_set(resolved_index if has_index else previous_index + 1)
        elif kind == CanonicalEvent.CLICK:
            # Simulator clicks on the first row may omit index and name.
            state.selection_set(resolved_index if has_index else 0)
        elif kind == CanonicalEvent.UNKNOWN and has_list_payload:
            implicit = True
            state.selection_set(resolved_index if has_index else 0)
        elif has_index:
            state.selection_set(resolved_index)

        state.last_event = self.eventLabel_build(kind, implicit, has_index)
        return EventOutcome(
            kind=kind,
            resolved_index=resolved_index if has_index else UNRESOLVED_INDEX,
            previous_index=index_clamp(previous_index, length),
            selected_index=state.selected_index,
            implicit_list=implicit,
        )

    def eventLabel_build(self, kind: CanonicalEvent, implicit: bool, has_index: bool) -> str:
        """
        Build the last-event label for a bridge event.

        The implicit list path gets a distinct marker so it can be told apart
        from an explicit click.
        """
        if implicit:
            path: str = "list-select" if has_index else "list-fallback"
            return f"{GLASSES_PREFIX}: {path} -> {self.state.selectedLabel_get()}"
        return f"{GLASSES_PREFIX}: {eventLabel_get(kind)}"

    def localAction_apply(self, label: str, mutator: Callable[[StateT], None] | None = None) -> StateT:
        """
        Apply a web panel action directly to the state.

        Args:
            label:
                Action label recorded as the last event.
            mutator:
                Optional in-place state change.

        Returns:
            The mutated state.
        """
        if mutator is not None:
            mutator(self.state)
        self.state.selection_clamp()
        self.state.last_event = f"{WEB_PREFIX}: {label}"
        logger.debug("Local action %s", label)
        return self.state

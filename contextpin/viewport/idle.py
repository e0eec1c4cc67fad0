"""Quiescence timer that replays the last viewport event once."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..config import DEFAULT_IDLE_REFRESH_SECONDS
from ..document import Document
from .state import IDLE_REFRESH, ViewportEvent


@dataclass
class IdleRefresh:
    """Polled by the host loop; fires once per burst of events.

    Annotations can go stale without a scroll event (switching documents,
    edits above the viewport). Replaying the last event after
    ``idle_seconds`` of quiet repairs them.
    """

    idle_seconds: float = DEFAULT_IDLE_REFRESH_SECONDS
    last_event: ViewportEvent | None = None
    last_activity: float = 0.0
    pending: bool = False

    def note_event(self, event: ViewportEvent, now: float) -> None:
        self.last_event = event
        self.last_activity = now
        self.pending = True

    def due(self, now: float) -> bool:
        return self.pending and self.last_event is not None and (now - self.last_activity) >= self.idle_seconds

    def take(self, document: Document | None = None) -> ViewportEvent | None:
        """Consume the pending replay, optionally against a newer ``document`` snapshot."""
        if not self.pending or self.last_event is None:
            return None
        self.pending = False
        event = replace(self.last_event, command=IDLE_REFRESH)
        if document is not None:
            event = replace(event, document=document)
        return event

    def cancel(self) -> None:
        self.last_event = None
        self.last_activity = 0.0
        self.pending = False

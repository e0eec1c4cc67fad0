"""Per-viewport records threaded through the annotation controller."""

from __future__ import annotations

from dataclasses import dataclass

from ..chain import ContextEntry
from ..document import Document, Position

SCROLL_LINE_UP = "scroll-line-up"
IDLE_REFRESH = "idle-refresh"

# Commands that move the viewport up by exactly one line, host aliases included.
UPWARD_LINE_SCROLL_COMMANDS = frozenset(
    {
        SCROLL_LINE_UP,
        "scroll-down-line",
        "evil-scroll-line-up",
        "viper-scroll-down-one",
    }
)


@dataclass(frozen=True)
class ViewportState:
    """Last seen first-visible position and the chain pinned for it.

    A fresh state (``first_visible is None``) means no event has been handled
    since the annotation was enabled.
    """

    first_visible: Position | None = None
    chain: tuple[ContextEntry, ...] = ()


@dataclass(frozen=True)
class ViewportEvent:
    """Host notification: the viewport onto ``document`` now starts at ``first_visible``.

    ``viewport_count`` is the number of distinct viewports showing the same
    document; ``command`` names the host command that triggered the event.
    """

    document: Document
    first_visible: Position
    command: str = ""
    viewport_count: int = 1


def is_upward_line_scroll(command: str) -> bool:
    return command in UPWARD_LINE_SCROLL_COMMANDS

"""Viewport nudge applied after an upward single-line scroll.

When the pinned chain changes length across a one-line upward scroll, the
rows under the annotation shift by more (or less) than the line the user
asked for. The nudge re-aligns the viewport so the real line the user
scrolled to sits directly below the chain again.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..document import Document, Position
from .state import ViewportState


@dataclass(frozen=True)
class ScrollCorrection:
    start: Position
    nudge: int = 0
    realigned: bool = False


def scroll_nudge(previous_length: int, new_length: int) -> int:
    """Lines to move the viewport by; negative moves it toward the document start."""
    return -(min(new_length - previous_length, 0) + 1)


def moved_up_one_line(state: ViewportState, candidate: Position) -> bool:
    previous = state.first_visible
    if previous is None:
        return False
    if candidate.line == previous.line - 1:
        return True
    return candidate.line == previous.line and candidate.column < previous.column


def correct_upward_scroll(
    document: Document,
    state: ViewportState,
    candidate: Position,
    chain_length_at: Callable[[Position], int],
) -> ScrollCorrection | None:
    """Return the corrected viewport start for an upward line scroll.

    ``None`` means the move was not a single-line upward scroll and needs no
    correction. A start that sits inside a wrapped line is snapped to the
    line start without a nudge, which would otherwise scroll twice. The
    result never moves before the document start.
    """
    if not document.lines or not moved_up_one_line(state, candidate):
        return None
    previous = state.first_visible
    if candidate.column > 0 or (previous is not None and candidate.line == previous.line):
        # Still on the same logical line: one wrapped row up, never a full line.
        return ScrollCorrection(start=Position(candidate.line, 0), realigned=True)

    nudge = scroll_nudge(len(state.chain), chain_length_at(candidate))
    line = max(0, min(len(document.lines) - 1, candidate.line + nudge))
    return ScrollCorrection(start=Position(line, 0), nudge=line - candidate.line)

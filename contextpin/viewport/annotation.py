"""Annotation records and their construction from a context chain."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..chain import ContextEntry
from ..document import Line, Position


@dataclass(frozen=True)
class AnnotationSpan:
    start: int
    end: int
    styles: tuple[str, ...]


@dataclass(frozen=True)
class Annotation:
    """Display replacement for ``[start, end)`` of the document.

    The range always spans two lines, the first visible one and the one
    below it; the second is re-shown verbatim after the chain. Hosts
    mis-render single-line replacements with multi-line display text.
    """

    start: int
    end: int
    display_text: str
    spans: tuple[AnnotationSpan, ...]
    viewport_start: Position
    chain: tuple[ContextEntry, ...]

    @property
    def range(self) -> tuple[int, int]:
        return self.start, self.end


def build_annotation(
    first_visible: Line,
    following: Line,
    chain: Sequence[ContextEntry],
    viewport_start: Position,
) -> Annotation:
    """Pin ``chain`` over ``first_visible`` and re-show ``following`` verbatim beneath it."""
    spans: list[AnnotationSpan] = []
    parts: list[str] = []
    offset = 0
    for entry in chain:
        parts.append(entry.text)
        spans.append(AnnotationSpan(offset, offset + len(entry.text), entry.styles))
        offset += len(entry.text)

    parts.append(following.text)
    for span in following.spans:
        start = max(0, min(span.start, len(following.text)))
        end = max(start, min(span.end, len(following.text)))
        if end > start:
            spans.append(AnnotationSpan(offset + start, offset + end, (span.style,)))

    return Annotation(
        start=first_visible.start,
        end=following.end,
        display_text="".join(parts),
        spans=tuple(spans),
        viewport_start=viewport_start,
        chain=tuple(chain),
    )

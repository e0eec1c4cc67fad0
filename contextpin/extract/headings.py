"""Outline-level context extraction for heading-structured documents."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from ..chain import CONTEXT_STYLE, ContextChain, entry_for_line, outline_style
from ..document import Document, Position

HeadingScanner = Callable[[Sequence[str]], list[tuple[int, int]]]

ORG_HEADING_RE = re.compile(r"^(\*+)[ \t]")
MARKDOWN_HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]|$)")
MARKDOWN_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")


def scan_org_headings(lines: Sequence[str]) -> list[tuple[int, int]]:
    """Return ``(line, level)`` for each ``*`` heading; the star count is the level."""
    headings: list[tuple[int, int]] = []
    for line_no, text in enumerate(lines):
        match = ORG_HEADING_RE.match(text)
        if match is not None:
            headings.append((line_no, len(match.group(1))))
    return headings


def scan_markdown_headings(lines: Sequence[str]) -> list[tuple[int, int]]:
    """Return ``(line, level)`` for ATX headings outside fenced code blocks."""
    headings: list[tuple[int, int]] = []
    fence: str | None = None
    for line_no, text in enumerate(lines):
        fence_match = MARKDOWN_FENCE_RE.match(text)
        if fence_match is not None:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif marker[0] == fence[0] and len(marker) >= len(fence):
                fence = None
            continue
        if fence is not None:
            continue
        match = MARKDOWN_HEADING_RE.match(text)
        if match is not None:
            headings.append((line_no, len(match.group(1))))
    return headings


def extract_heading_context(
    document: Document,
    position: Position,
    scan_headings: HeadingScanner = scan_org_headings,
) -> ContextChain:
    """Return enclosing headings of ``position``, outermost level first.

    Starts at the nearest heading at or above ``position`` and climbs to the
    nearest preceding heading of strictly lower level until level 1.
    """
    if not document.lines:
        return []
    target = document.clamp(position).line
    texts = [line.text for line in document.lines[: target + 1]]
    headings = scan_headings(texts)
    if not headings:
        return []

    line_no, level = headings[-1]
    picked = [(line_no, level)]
    for line_no, heading_level in reversed(headings[:-1]):
        if level <= 1:
            break
        if heading_level < level:
            level = heading_level
            picked.append((line_no, heading_level))

    return [
        entry_for_line(
            document.line_text(line_no),
            line_no,
            heading_level,
            (CONTEXT_STYLE, outline_style(heading_level)),
        )
        for line_no, heading_level in reversed(picked)
    ]

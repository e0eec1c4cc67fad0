"""Indentation measurement shared by the extractors."""

from __future__ import annotations

TAB_WIDTH = 4


def leading_indent_columns(text: str) -> int:
    """Return leading indentation width where tabs count as four columns."""
    count = 0
    for ch in text:
        if ch == " ":
            count += 1
            continue
        if ch == "\t":
            count += TAB_WIDTH
            continue
        break
    return count

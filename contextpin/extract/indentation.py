"""Indentation-based context extraction.

Walks backward from a position and keeps one line per strictly shallower
indentation level, reconstructing the enclosing block headers. This is a
line scan, not a parse: mixed or adversarial indentation gives a best-effort
chain.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from ..chain import ContextChain, ContextEntry, entry_for_line
from ..classifier import DEFAULT_VALIDITY_PATTERN, is_context_worthy
from ..document import Document, Position
from .definitions import Definition
from .indent import leading_indent_columns

DefinitionFinder = Callable[[Document, Position], "Definition | None"]


def previous_worthy_line(
    document: Document,
    before_line: int,
    pattern: re.Pattern[str] = DEFAULT_VALIDITY_PATTERN,
) -> int | None:
    """Return the closest line above ``before_line`` that passes the classifier."""
    for line_no in range(before_line - 1, -1, -1):
        if is_context_worthy(document.line_text(line_no), pattern):
            return line_no
    return None


def _entry(document: Document, line_no: int) -> ContextEntry:
    text = document.line_text(line_no)
    return entry_for_line(text, line_no, leading_indent_columns(text))


def extract_indentation_context(
    document: Document,
    position: Position,
    *,
    pattern: re.Pattern[str] = DEFAULT_VALIDITY_PATTERN,
    find_definition: DefinitionFinder | None = None,
) -> ContextChain:
    """Return the indentation ancestors of ``position``, outer-to-inner.

    The anchor is the closest worthy line above ``position``; when there is
    none, the first document line is the anchor unless it is blank. Each
    further entry is strictly shallower than the one after it.

    ``find_definition`` adds the enclosing definition header when the scan
    stopped below it, which happens when a body line sits at or left of its
    header's indentation (column-0 docstrings, K&R-style C).
    """
    if not document.lines:
        return []
    target = document.clamp(position).line
    if target <= 0:
        return []

    anchor = previous_worthy_line(document, target, pattern)
    if anchor is None:
        if document.lines[0].is_blank:
            return []
        anchor = 0

    inner_to_outer = [_entry(document, anchor)]
    depth = inner_to_outer[0].depth
    cursor = anchor
    while depth > 0:
        found = previous_worthy_line(document, cursor, pattern)
        if found is None:
            break
        cursor = found
        line_depth = leading_indent_columns(document.line_text(cursor))
        if line_depth < depth:
            depth = line_depth
            inner_to_outer.append(_entry(document, cursor))

    chain = inner_to_outer[::-1]
    if find_definition is not None:
        definition = find_definition(document, Position(target, 0))
        if definition is not None and definition.line < chain[0].line:
            chain.insert(0, _entry(document, definition.line))
    return chain

"""Source loading, sanitization, and Pygments lookups.

Document-type detection falls back to Pygments lexer aliases, and the CLI
uses Pygments to colorize the pinned context lines it prints.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_by_name, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()
DEFAULT_STYLE = "monokai"


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def lexer_alias_for_filename(filename: str) -> str | None:
    """Return the primary Pygments alias for ``filename``, or ``None`` if unknown."""
    try:
        lexer = get_lexer_for_filename(filename)
    except ClassNotFound:
        return None
    aliases = getattr(lexer, "aliases", None) or []
    return aliases[0] if aliases else None


def _normalize_style(style: str) -> str:
    """Validate/canonicalize requested style name with cache-backed checks."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    """Return cached terminal formatter for style name."""
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_text(text: str, document_type: str | None, style: str = DEFAULT_STYLE) -> str:
    """Highlight ``text`` with the lexer registered for ``document_type``.

    Unknown types use the plain text lexer. Returns ``text`` unchanged when
    Pygments fails.
    """
    formatter = _formatter_for_style(_normalize_style(style))
    try:
        lexer = get_lexer_by_name(document_type) if document_type else TextLexer()
    except ClassNotFound:
        lexer = TextLexer()

    try:
        rendered = pygments_highlight(text, lexer, formatter)
    except Exception:
        return text
    if text.endswith("\n") or not rendered.endswith("\n"):
        return rendered
    return rendered[:-1]

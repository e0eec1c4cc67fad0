"""Immutable document view consumed by the context extractors.

A ``Document`` is a snapshot of host-owned text: ordered lines with char
ranges and optional style spans, plus the identity (``path``) and document
type the host knows it by. Extractors only ever read it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .syntax import read_text


def split_lines(text: str) -> list[str]:
    """Universal-newline split without a trailing empty line."""
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


@dataclass(frozen=True)
class StyleSpan:
    """Style tag applied to ``[start, end)`` columns of one line."""

    start: int
    end: int
    style: str


@dataclass(frozen=True)
class Position:
    """Zero-based line index plus column offset inside that line."""

    line: int
    column: int = 0


@dataclass(frozen=True)
class Line:
    number: int
    start: int
    end: int
    text: str
    spans: tuple[StyleSpan, ...] = ()

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class Document:
    """Line-indexed snapshot of a host document.

    ``path`` is ``None`` for unnamed (scratch) content. Char offsets count the
    line terminator as a single character regardless of its original form.
    """

    lines: tuple[Line, ...] = ()
    path: Path | None = None
    document_type: str | None = None

    @classmethod
    def from_lines(
        cls,
        lines: list[str],
        *,
        path: Path | None = None,
        document_type: str | None = None,
        spans: dict[int, tuple[StyleSpan, ...]] | None = None,
    ) -> "Document":
        """Build a document from terminator-free line strings."""
        built: list[Line] = []
        offset = 0
        for number, raw in enumerate(lines):
            line_spans = tuple(spans.get(number, ())) if spans else ()
            built.append(Line(number, offset, offset + len(raw), raw, line_spans))
            offset += len(raw) + 1
        return cls(tuple(built), path, document_type)

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        path: Path | None = None,
        document_type: str | None = None,
        spans: dict[int, tuple[StyleSpan, ...]] | None = None,
    ) -> "Document":
        """Split ``text`` on ``\\n``, ``\\r\\n`` and ``\\r`` only.

        Form feeds and other Unicode separators stay inside their line.
        """
        return cls.from_lines(split_lines(text), path=path, document_type=document_type, spans=spans)

    @classmethod
    def from_path(cls, path: Path, *, document_type: str | None = None) -> "Document":
        """Load ``path`` with tolerant decoding; the resolved path becomes the identity."""
        target = path.resolve()
        return cls.from_text(read_text(target), path=target, document_type=document_type)

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def line(self, number: int) -> Line | None:
        if 0 <= number < len(self.lines):
            return self.lines[number]
        return None

    def line_text(self, number: int) -> str:
        line = self.line(number)
        return line.text if line is not None else ""

    def clamp(self, position: Position) -> Position:
        """Clamp ``position`` into the document, keeping column within its line."""
        if not self.lines:
            return Position(0, 0)
        number = max(0, min(position.line, len(self.lines) - 1))
        width = len(self.lines[number].text)
        return Position(number, max(0, min(position.column, width)))

    def offset_of(self, position: Position) -> int:
        clamped = self.clamp(position)
        if not self.lines:
            return 0
        return self.lines[clamped.line].start + clamped.column

"""Context chain records and the truncation policy applied before pinning."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

CONTEXT_STYLE = "context"
OUTLINE_STYLE_LEVELS = 8


def outline_style(level: int) -> str:
    """Return the level-indexed style tag, cycling like outline faces do."""
    return f"outline-{((max(1, level) - 1) % OUTLINE_STYLE_LEVELS) + 1}"


@dataclass(frozen=True)
class ContextEntry:
    """One ancestor line of a context chain.

    ``depth`` is the indentation width for indentation chains and the heading
    level for outline chains. ``text`` always ends with a newline.
    """

    text: str
    line: int
    depth: int
    styles: tuple[str, ...] = (CONTEXT_STYLE,)


ContextChain = list[ContextEntry]


def entry_for_line(
    line_text: str,
    line: int,
    depth: int,
    styles: tuple[str, ...] = (CONTEXT_STYLE,),
) -> ContextEntry:
    return ContextEntry(text=f"{line_text}\n", line=line, depth=depth, styles=styles)


def chain_texts(chain: Sequence[ContextEntry]) -> list[str]:
    return [entry.text for entry in chain]


@dataclass(frozen=True)
class TruncationPolicy:
    """Keep ``keep_from_top`` outer entries and ``keep_from_bottom`` inner ones.

    Both zero disables truncation.
    """

    keep_from_top: int = 0
    keep_from_bottom: int = 0

    def __post_init__(self) -> None:
        if self.keep_from_top < 0 or self.keep_from_bottom < 0:
            raise ValueError("truncation counts must be non-negative")

    @property
    def disabled(self) -> bool:
        return self.keep_from_top == 0 and self.keep_from_bottom == 0


def truncate_chain(chain: Sequence[ContextEntry], policy: TruncationPolicy) -> ContextChain:
    """Bound ``chain`` to the policy's budget, preserving relative order."""
    if policy.disabled:
        return list(chain)

    top_count = min(len(chain), policy.keep_from_top)
    top = list(chain[:top_count])
    rest = list(chain[top_count:])
    bottom_count = min(len(rest), policy.keep_from_bottom)
    bottom = rest[len(rest) - bottom_count :]
    return top + bottom

"""Line-quality filtering for context extraction.

A line is worth pinning as context when it carries real content rather than
pure structure (a lone ``(`` or ``}``). The default policy asks for at least
two alphanumeric characters; document types may swap in stricter patterns.
"""

from __future__ import annotations

import re

# Two alphanumerics anywhere on the line; ``[^\W_]`` excludes underscore.
DEFAULT_VALIDITY_PATTERN = re.compile(r"[^\W_].*[^\W_]")

# Comment-only lines never open a block in these languages.
HASH_COMMENT_VALIDITY_PATTERN = re.compile(r"^(?!\s*#)\s*.*[^\W_].*[^\W_]")

VALIDITY_PATTERNS_BY_TYPE: dict[str, re.Pattern[str]] = {
    "python": HASH_COMMENT_VALIDITY_PATTERN,
    "bash": HASH_COMMENT_VALIDITY_PATTERN,
    "ruby": HASH_COMMENT_VALIDITY_PATTERN,
    "yaml": HASH_COMMENT_VALIDITY_PATTERN,
}


def is_context_worthy(line_text: str, pattern: re.Pattern[str] = DEFAULT_VALIDITY_PATTERN) -> bool:
    """Return whether ``line_text`` is meaningful enough to serve as context."""
    if not line_text.strip():
        return False
    return pattern.search(line_text) is not None


def select_validity_pattern(
    document_type: str | None,
    overrides: dict[str, re.Pattern[str]] | None = None,
) -> re.Pattern[str]:
    """Resolve the line-quality pattern for ``document_type``.

    ``overrides`` (typically from user settings) win over built-in entries;
    unknown types get ``DEFAULT_VALIDITY_PATTERN``.
    """
    if document_type is None:
        return DEFAULT_VALIDITY_PATTERN
    key = document_type.lower()
    if overrides and key in overrides:
        return overrides[key]
    return VALIDITY_PATTERNS_BY_TYPE.get(key, DEFAULT_VALIDITY_PATTERN)

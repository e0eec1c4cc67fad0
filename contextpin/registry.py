"""Document-type resolution and extractor selection.

The registry maps a document type to the extractor that should build its
context chain. Types come from the document itself, then a suffix table,
then Pygments lexer aliases; anything unresolved gets the indentation
extractor with the default validity pattern.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from functools import partial

from .chain import ContextChain
from .classifier import select_validity_pattern
from .document import Document, Position
from .extract.definitions import find_enclosing_definition
from .extract.definitions_config import FALLBACK_PATTERNS_BY_LANGUAGE
from .extract.headings import HeadingScanner, extract_heading_context, scan_markdown_headings, scan_org_headings
from .extract.indentation import extract_indentation_context
from .syntax import lexer_alias_for_filename

Extractor = Callable[[Document, Position], ContextChain]
ExtractorFactory = Callable[[str | None, dict[str, re.Pattern[str]]], Extractor]

DOCUMENT_TYPE_BY_SUFFIX: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".pyw": "python",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".hpp": "cpp",
    ".rb": "ruby",
    ".lua": "lua",
    ".sh": "bash",
    ".bash": "bash",
    ".zsh": "bash",
    ".sql": "sql",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".md": "markdown",
    ".markdown": "markdown",
    ".org": "org",
}

HEADING_SCANNERS: dict[str, HeadingScanner] = {
    "org": scan_org_headings,
    "markdown": scan_markdown_headings,
}

# Languages with a definition grammar or regex fallback worth querying.
DEFINITION_LANGUAGES = set(FALLBACK_PATTERNS_BY_LANGUAGE) | {"java", "c", "cpp"}


def resolve_document_type(document: Document) -> str | None:
    """Return the document's type key, or ``None`` when it cannot be determined."""
    if document.document_type:
        return document.document_type.strip().lower() or None
    if document.path is None:
        return None
    by_suffix = DOCUMENT_TYPE_BY_SUFFIX.get(document.path.suffix.lower())
    if by_suffix is not None:
        return by_suffix
    return lexer_alias_for_filename(document.path.name)


def indentation_extractor(
    document_type: str | None,
    validity_overrides: dict[str, re.Pattern[str]],
) -> Extractor:
    pattern = select_validity_pattern(document_type, validity_overrides)
    find_definition = None
    if document_type in DEFINITION_LANGUAGES:
        find_definition = partial(_find_definition, language_name=document_type)
    return partial(extract_indentation_context, pattern=pattern, find_definition=find_definition)


def _find_definition(document: Document, position: Position, *, language_name: str):
    return find_enclosing_definition(document, position, language_name)


def heading_extractor(scan_headings: HeadingScanner) -> ExtractorFactory:
    def factory(_document_type: str | None, _overrides: dict[str, re.Pattern[str]]) -> Extractor:
        return partial(extract_heading_context, scan_headings=scan_headings)

    return factory


class ExtractorRegistry:
    """Typed document-type → extractor-factory table with a default entry."""

    def __init__(
        self,
        default: ExtractorFactory = indentation_extractor,
        validity_overrides: dict[str, re.Pattern[str]] | None = None,
    ) -> None:
        self._factories: dict[str, ExtractorFactory] = {}
        self._default = default
        self._validity_overrides = dict(validity_overrides or {})
        for document_type, scanner in HEADING_SCANNERS.items():
            self.register(document_type, heading_extractor(scanner))

    def register(self, document_type: str, factory: ExtractorFactory) -> None:
        self._factories[document_type.strip().lower()] = factory

    def select_extractor(self, document_type: str | None) -> Extractor:
        key = document_type.strip().lower() if document_type else None
        factory = self._factories.get(key, self._default) if key else self._default
        return factory(key, self._validity_overrides)

    def extractor_for(self, document: Document) -> Extractor:
        return self.select_extractor(resolve_document_type(document))

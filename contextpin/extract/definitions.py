"""Enclosing-definition lookup for the indentation post-pass.

Uses Tree-sitter when a provider package is installed, which yields real
definition extents, and per-language regex patterns otherwise, where the
extent is approximated by an indentation scope check.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from functools import lru_cache

from ..document import Document, Position
from .definitions_config import (
    DECORATED_NODE_TYPES,
    DEFINITION_CACHE_MAX,
    DEFINITION_NODE_TYPES,
    FALLBACK_PATTERNS_BY_LANGUAGE,
    GENERIC_FALLBACK_PATTERNS,
    MISSING_PARSER_ERROR,
)
from .indent import leading_indent_columns

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Definition:
    """Start line of a function/class-like unit; ``end_line`` is known only from Tree-sitter."""

    line: int
    column: int
    end_line: int | None = None


_DEFINITION_CACHE: OrderedDict[tuple[str, int, int], tuple[Definition, ...]] = OrderedDict()


@lru_cache(maxsize=32)
def _load_parser(language_name: str):
    """Load a Tree-sitter parser using supported provider packages.

    Tries ``tree_sitter_language_pack`` first, then ``tree_sitter_languages``.
    Returns ``(parser, error_message)``.
    """
    errors: list[str] = []

    try:
        from tree_sitter_language_pack import get_parser

        return get_parser(language_name), None
    except ModuleNotFoundError:
        pass
    except Exception as exc:
        errors.append(f"Failed to load Tree-sitter parser for {language_name}: {exc}")

    try:
        from tree_sitter_languages import get_parser

        return get_parser(language_name), None
    except ModuleNotFoundError:
        pass
    except Exception as exc:
        errors.append(f"Failed to load Tree-sitter parser for {language_name}: {exc}")

    if errors:
        return None, errors[0]
    return None, MISSING_PARSER_ERROR


def _collect_definitions_fallback(lines: list[str], language_name: str) -> list[Definition]:
    """Collect definition starts via language-specific regex patterns."""
    patterns = FALLBACK_PATTERNS_BY_LANGUAGE.get(language_name, GENERIC_FALLBACK_PATTERNS)
    found: list[Definition] = []
    for line_idx, line in enumerate(lines):
        if any(pattern.match(line) for pattern in patterns):
            found.append(Definition(line=line_idx, column=leading_indent_columns(line)))
    return found


def _collect_definitions_tree_sitter(parser, source: str) -> list[Definition]:
    tree = parser.parse(source.encode("utf-8", errors="replace"))
    found: list[Definition] = []

    def walk(node) -> None:
        """Depth-first traversal collecting definition nodes."""
        if node.type in DECORATED_NODE_TYPES:
            definition = node.child_by_field_name("definition")
            if definition is not None:
                walk(definition)
                return

        if node.type in DEFINITION_NODE_TYPES:
            start_line, start_column = node.start_point[0], node.start_point[1]
            found.append(Definition(int(start_line), int(start_column), int(node.end_point[0])))

        for child in node.named_children:
            walk(child)

    walk(tree.root_node)
    return found


def collect_definitions(source: str, language_name: str) -> list[Definition]:
    """Collect definition starts for ``source``, sorted by line.

    Parser load or parse failures fall back to regex patterns.
    """
    parser, parser_error = _load_parser(language_name)
    definitions: list[Definition] | None = None
    if parser is not None:
        try:
            definitions = _collect_definitions_tree_sitter(parser, source)
        except Exception:
            logger.debug("Tree-sitter parse failed for %s", language_name, exc_info=True)
    elif parser_error != MISSING_PARSER_ERROR:
        logger.debug("%s", parser_error)

    if definitions is None:
        definitions = _collect_definitions_fallback(source.split("\n"), language_name)
    definitions.sort(key=lambda item: (item.line, item.column))
    return definitions


def _collect_definitions_cached(document: Document, language_name: str) -> list[Definition]:
    """Collect definitions with a small LRU cache keyed by language and text identity."""
    source = document.text
    cache_key = (language_name, len(source), hash(source))
    cached = _DEFINITION_CACHE.get(cache_key)
    if cached is not None:
        _DEFINITION_CACHE.move_to_end(cache_key)
        return list(cached)

    definitions = collect_definitions(source, language_name)
    _DEFINITION_CACHE[cache_key] = tuple(definitions)
    _DEFINITION_CACHE.move_to_end(cache_key)
    while len(_DEFINITION_CACHE) > DEFINITION_CACHE_MAX:
        _DEFINITION_CACHE.popitem(last=False)
    return definitions


def clear_definition_cache() -> None:
    _DEFINITION_CACHE.clear()


def _indent_scope_contains(document: Document, definition: Definition, target_line: int) -> bool:
    """Return whether ``target_line`` still lies inside ``definition`` by indentation.

    Any nonblank line after the header that is indented no deeper than the
    header ends the scope, except closing brackets and parentheses.
    """
    header_indent = leading_indent_columns(document.line_text(definition.line))
    for line_no in range(definition.line + 1, target_line + 1):
        text = document.line_text(line_no)
        stripped = text.lstrip()
        if not stripped or stripped[0] in "})]":
            continue
        if leading_indent_columns(text) <= header_indent:
            return False
    return True


def find_enclosing_definition(
    document: Document,
    position: Position,
    language_name: str,
) -> Definition | None:
    """Return the innermost definition starting above ``position`` that encloses it."""
    target = document.clamp(position).line
    for definition in reversed(_collect_definitions_cached(document, language_name)):
        if definition.line >= target:
            continue
        if definition.end_line is not None:
            if target <= definition.end_line:
                return definition
            continue
        if _indent_scope_contains(document, definition, target):
            return definition
    return None

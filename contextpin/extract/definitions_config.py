"""Grammar configuration for enclosing-definition lookup."""

from __future__ import annotations

import re

DEFINITION_NODE_TYPES = {
    "function_definition",
    "function_declaration",
    "function_item",
    "method_definition",
    "method_declaration",
    "class_definition",
    "class_declaration",
    "class_specifier",
    "struct_item",
    "impl_item",
    "trait_item",
}
DECORATED_NODE_TYPES = {"decorated_definition", "decorated_declaration"}

MISSING_PARSER_ERROR = (
    "Tree-sitter parser package not found. Install tree-sitter-language-pack or tree-sitter-languages."
)
DEFINITION_CACHE_MAX = 64

_JS_LIKE = (
    re.compile(r"^\s*(?:export\s+)?(?:default\s+)?class\s+[A-Za-z_$][\w$]*"),
    re.compile(r"^\s*(?:export\s+)?(?:async\s+)?function\b"),
    re.compile(r"^\s*(?:export\s+)?(?:const|let|var)\s+[A-Za-z_$][\w$]*\s*=\s*(?:async\s*)?\([^)]*\)\s*=>"),
)

FALLBACK_PATTERNS_BY_LANGUAGE: dict[str, tuple[re.Pattern[str], ...]] = {
    "python": (
        re.compile(r"^\s*class\s+[A-Za-z_]\w*"),
        re.compile(r"^\s*(?:async\s+)?def\s+[A-Za-z_]\w*"),
    ),
    "javascript": _JS_LIKE,
    "typescript": _JS_LIKE,
    "tsx": _JS_LIKE,
    "go": (
        re.compile(r"^\s*type\s+[A-Za-z_]\w*\s+(?:struct|interface)\b"),
        re.compile(r"^\s*func\s+(?:\([^)]*\)\s*)?[A-Za-z_]\w*\s*\("),
    ),
    "rust": (
        re.compile(r"^\s*(?:pub(?:\([^)]*\))?\s+)?(?:struct|enum|trait|impl)\b"),
        re.compile(r"^\s*(?:pub(?:\([^)]*\))?\s+)?(?:async\s+)?fn\s+[A-Za-z_]\w*"),
    ),
    "ruby": (
        re.compile(r"^\s*(?:class|module)\s+[A-Za-z_][\w:]*"),
        re.compile(r"^\s*def\s+[A-Za-z_][\w!?=.]*"),
    ),
    "lua": (re.compile(r"^\s*(?:local\s+)?function\s+[A-Za-z_][\w.:]*"),),
    "bash": (
        re.compile(r"^\s*[A-Za-z_][A-Za-z0-9_]*\s*\(\)\s*\{"),
        re.compile(r"^\s*function\s+[A-Za-z_][A-Za-z0-9_]*\b"),
    ),
    "sql": (
        re.compile(r"^\s*create\s+(?:or\s+replace\s+)?(?:function|procedure|table|view|trigger)\b", re.IGNORECASE),
    ),
}

GENERIC_FALLBACK_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\s*(?:export\s+)?class\s+[A-Za-z_$][\w$]*"),
    re.compile(r"^\s*(?:async\s+)?def\s+[A-Za-z_]\w*"),
    re.compile(r"^\s*(?:export\s+)?(?:async\s+)?function\b"),
    re.compile(r"^\s*func\s+(?:\([^)]*\)\s*)?[A-Za-z_]\w*\s*\("),
    re.compile(r"^\s*(?:pub\s+)?(?:async\s+)?fn\s+[A-Za-z_]\w*"),
)

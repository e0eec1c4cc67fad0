"""Context extractors: indentation chains and outline heading chains."""

from .definitions import Definition, clear_definition_cache, find_enclosing_definition
from .headings import extract_heading_context, scan_markdown_headings, scan_org_headings
from .indentation import extract_indentation_context

__all__ = [
    "Definition",
    "clear_definition_cache",
    "extract_heading_context",
    "extract_indentation_context",
    "find_enclosing_definition",
    "scan_markdown_headings",
    "scan_org_headings",
]

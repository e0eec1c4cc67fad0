"""Line classifier and enclosing-definition lookup tests.

Definition lookups force the regex fallback so results do not depend on
which Tree-sitter provider happens to be installed.
"""

from __future__ import annotations

import re
import unittest
from unittest import mock

from contextpin.classifier import (
    DEFAULT_VALIDITY_PATTERN,
    is_context_worthy,
    select_validity_pattern,
)
from contextpin.document import Document, Position
from contextpin.extract import definitions
from contextpin.extract.definitions import Definition, find_enclosing_definition
from contextpin.extract.definitions_config import MISSING_PARSER_ERROR


class ClassifierTests(unittest.TestCase):
    def test_two_alphanumerics_make_a_line_worthy(self) -> None:
        self.assertTrue(is_context_worthy("CREATE TABLE xyz"))
        self.assertTrue(is_context_worthy("  a b"))
        self.assertTrue(is_context_worthy("ok"))

    def test_structure_only_lines_are_rejected(self) -> None:
        for text in ("(", "  ) ;", "{", "}", "", "    ", "x", "__", "-- //"):
            with self.subTest(text=text):
                self.assertFalse(is_context_worthy(text))

    def test_non_ascii_letters_count_as_alphanumeric(self) -> None:
        self.assertTrue(is_context_worthy("  über"))

    def test_unknown_type_uses_default_pattern(self) -> None:
        self.assertIs(select_validity_pattern(None), DEFAULT_VALIDITY_PATTERN)
        self.assertIs(select_validity_pattern("haskell"), DEFAULT_VALIDITY_PATTERN)

    def test_overrides_take_precedence_and_match_case_insensitively(self) -> None:
        custom = re.compile(r"^\S")
        self.assertIs(select_validity_pattern("Python", {"python": custom}), custom)
        self.assertIsNot(select_validity_pattern("python"), custom)

    def test_hash_comment_pattern_rejects_comment_lines_only(self) -> None:
        pattern = select_validity_pattern("bash")
        self.assertFalse(is_context_worthy("  # configure things", pattern))
        self.assertTrue(is_context_worthy("build() {  # main entry", pattern))


class RegexDefinitionLookupTests(unittest.TestCase):
    def setUp(self) -> None:
        definitions.clear_definition_cache()
        patcher = mock.patch.object(definitions, "_load_parser", return_value=(None, MISSING_PARSER_ERROR))
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(definitions.clear_definition_cache)

    def test_innermost_enclosing_method_is_returned(self) -> None:
        document = Document.from_lines(
            [
                "class Box:",
                "    def first(self):",
                "        return 1",
                "",
                "    def second(self):",
                "        value = 2",
                "        return value",
            ]
        )
        found = find_enclosing_definition(document, Position(6, 0), "python")
        self.assertEqual(found, Definition(line=4, column=4))

    def test_finished_function_does_not_enclose_later_top_level_code(self) -> None:
        document = Document.from_lines(["def first():", "    return 1", "", "value = first()", "print(value)"])
        self.assertIsNone(find_enclosing_definition(document, Position(4, 0), "python"))

    def test_closing_parenthesis_keeps_multiline_signature_in_scope(self) -> None:
        document = Document.from_lines(["def run(", "    a,", "):", "    return a"])
        self.assertEqual(find_enclosing_definition(document, Position(3, 0), "python"), Definition(0, 0))

    def test_definition_on_target_line_is_not_its_own_context(self) -> None:
        document = Document.from_lines(["x = 1", "def run():", "    pass"])
        self.assertIsNone(find_enclosing_definition(document, Position(1, 0), "python"))

    def test_form_feed_line_keeps_definition_line_numbers(self) -> None:
        document = Document.from_lines(["\x0c", "def run():", "    a = 1", "    return a"])
        self.assertEqual(find_enclosing_definition(document, Position(3, 0), "python"), Definition(1, 0))

    def test_unknown_language_uses_generic_patterns(self) -> None:
        document = Document.from_lines(["fn main() {", "    body();", "}"])
        self.assertEqual(find_enclosing_definition(document, Position(1, 0), "mystery"), Definition(0, 0))

    def test_tree_sitter_extents_override_indentation_heuristic(self) -> None:
        document = Document.from_lines(["def outer():", '    s = """', "flush left", '"""', "    return s"])
        with mock.patch.object(
            definitions,
            "_collect_definitions_cached",
            return_value=[Definition(line=0, column=0, end_line=4)],
        ):
            self.assertEqual(find_enclosing_definition(document, Position(4, 0), "python").line, 0)
        self.assertIsNone(find_enclosing_definition(document, Position(4, 0), "python"))


if __name__ == "__main__":
    unittest.main()
